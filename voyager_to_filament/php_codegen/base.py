import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Sequence

from jinja2 import Environment, PackageLoader, StrictUndefined

logger = logging.getLogger(__name__)


def php_string(value: Any) -> str:
    """Render a value as a single-quoted PHP string literal."""
    text = str(value)
    return "'" + text.replace("\\", "\\\\").replace("'", "\\'") + "'"


def php_value(value: Any) -> str:
    """
    Render a scalar as a PHP literal.

    Numbers (including numeric strings from JSON details) are emitted bare,
    booleans as ``true``/``false`` and everything else as a string literal.
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return repr(value)
    if isinstance(value, str):
        stripped = value.strip()
        try:
            float(stripped)
        except ValueError:
            return php_string(value)
        if stripped.lower() not in ("nan", "inf", "-inf", "infinity", "-infinity"):
            return stripped
    return php_string(value)


def php_list(items: Iterable[Any]) -> str:
    """Render an iterable as a PHP list of string literals."""
    return "[" + ", ".join(php_string(item) for item in items) + "]"


def php_array(mapping: Mapping[Any, Any]) -> str:
    """Render a mapping as a PHP associative array of string literals."""
    pairs = [f"{php_string(key)} => {php_string(value)}" for key, value in mapping.items()]
    return "[" + ", ".join(pairs) + "]"


def render_declaration(class_name: str, name: str, modifiers: Sequence[str], indent: int) -> str:
    """
    Render a fluent Filament declaration followed by a trailing comma.

    Example:
        >>> print(render_declaration("TextInput", "title", ["label('Title')"], 0))
        TextInput::make('title')
            ->label('Title'),
    """
    pad = " " * indent
    lines = [f"{pad}{class_name}::make({php_string(name)})"]
    lines.extend(f"{pad}    ->{modifier}" for modifier in modifiers)
    lines[-1] += ","
    return "\n".join(lines)


def setup_jinja_env() -> Environment:
    """Sets up and returns the Jinja2 environment for the PHP templates."""
    env = Environment(
        loader=PackageLoader("voyager_to_filament", "templates"),
        autoescape=False,  # PHP source, not HTML
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
        undefined=StrictUndefined,
    )
    env.filters["php_string"] = php_string
    env.filters["php_list"] = php_list
    env.globals["declaration"] = render_declaration
    return env


_ENV = None


def get_jinja_env() -> Environment:
    """Return the shared Jinja2 environment, creating it on first use."""
    global _ENV
    if _ENV is None:
        _ENV = setup_jinja_env()
    return _ENV


def render_template(template_name: str, context: Dict[str, Any]) -> str:
    """Render one of the bundled PHP templates."""
    template = get_jinja_env().get_template(template_name)
    return template.render(context)


class ArtifactWriter:
    """
    Writes generated artifacts, honouring the overwrite policy.

    Existing files are skipped unless ``force`` is set. Parent directories are
    created on demand.
    """

    def __init__(self, force: bool = False):
        self.force = force
        self.written: List[Path] = []
        self.skipped: List[Path] = []

    def write(self, path: Path, content: str) -> bool:
        """Write ``content`` to ``path``. Returns False when the file was skipped."""
        path = Path(path)
        if path.exists() and not self.force:
            logger.warning(f"{path.name} already exists. Use --force to overwrite.")
            self.skipped.append(path)
            return False

        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            f.write(content)
        logger.debug(f"Generated file: {path}")
        self.written.append(path)
        return True

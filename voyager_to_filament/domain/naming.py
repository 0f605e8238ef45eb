"""
Naming convention utilities for the Voyager to Filament converter.

This module converts Voyager model names and display labels into the PHP class
and namespace names used by the generated Filament code.
"""

import logging
import re
from typing import List, Iterable

import inflect

from ..constants import Namespaces


logger = logging.getLogger(__name__)

# Initialize inflect engine for pluralization
p = inflect.engine()


def class_basename(class_name: str) -> str:
    """
    Return the last segment of a PHP fully qualified class name.

    Example:
        >>> class_basename("TCG\\\\Voyager\\\\Models\\\\Post")
        'Post'
    """
    if not isinstance(class_name, str):
        raise TypeError(f"Expected string, got {type(class_name).__name__}")
    return class_name.strip("\\").rsplit("\\", 1)[-1]


def studly_case(value: str) -> str:
    """
    Convert a label, slug or snake_case name to StudlyCase.

    Words are split on anything that is not a letter or digit, accented
    letters included. The first letter of each word is upper-cased and the
    rest is kept as-is.

    Example:
        >>> studly_case("blog posts")
        'BlogPosts'
        >>> studly_case("super-admin")
        'SuperAdmin'
        >>> studly_case("catégories d'été")
        'CatégoriesDÉté'
    """
    words = re.split(r"[\W_]+", value or "")
    return "".join(word[:1].upper() + word[1:] for word in words if word)


def pluralize(word: str) -> str:
    """
    Pluralize a word with inflect, falling back to appending 's'.

    inflect leaves capitalised words alone as proper nouns (``Categorys``),
    so the first letter is lowered for the lookup and restored afterwards.
    """
    if not isinstance(word, str) or not word:
        return ""
    try:
        plural = p.plural(word[:1].lower() + word[1:])
    except Exception as e:
        logger.error(f"Inflect pluralization failed for '{word}': {e}. Falling back to adding 's'.")
        return word + "s"
    if not plural:
        return word + "s"
    return word[:1] + plural[1:]


def panel_namespace(panel: str) -> str:
    """StudlyCase directory and namespace segment for a Filament panel."""
    return studly_case(panel)


def resources_namespace(panel: str) -> str:
    """PHP namespace holding the resources of a panel."""
    return f"{Namespaces.FILAMENT_ROOT}\\{panel_namespace(panel)}\\Resources"


def app_model_class(voyager_model_name: str) -> str:
    """
    Return the application model class for a Voyager model name.

    Voyager's bundled models (``TCG\\Voyager\\Models\\X``) are remapped to
    ``App\\Models\\X``; anything else is returned unchanged.
    """
    model_name = voyager_model_name.strip("\\")
    if model_name.startswith(Namespaces.VOYAGER_MODELS):
        return f"{Namespaces.APP_MODELS}{class_basename(model_name)}"
    return model_name


def qualify_model_names(models: Iterable[str]) -> List[str]:
    """
    Expand requested model names into the fully qualified names to look up.

    Every name is looked up as given. Names not already rooted at ``App\\``
    or ``TCG\\`` are also tried under each conventional model namespace.

    Example:
        >>> qualify_model_names(["Post"])
        ['Post', 'App\\\\Models\\\\Post', 'App\\\\Post', 'TCG\\\\Voyager\\\\Models\\\\Post']
    """
    qualified: List[str] = []
    for model in models:
        model = (model or "").strip().strip("\\")
        if not model:
            continue
        candidates = [model]
        if not model.startswith(Namespaces.QUALIFIED_PREFIXES):
            candidates += [f"{prefix}{model}" for prefix in Namespaces.MODEL_CANDIDATE_PREFIXES]
        for candidate in candidates:
            if candidate not in qualified:
                qualified.append(candidate)
    return qualified

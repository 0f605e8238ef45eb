import logging
import django
from django.db import connections, DEFAULT_DB_ALIAS
from django.conf import settings
from typing import List, Optional, Dict, Any, Sequence

from voyager_to_filament.constants import VoyagerTables
from voyager_to_filament.domain.models import DataType, DataRow
from voyager_to_filament.domain.naming import qualify_model_names
from voyager_to_filament.exceptions import VoyagerTablesMissingError


logger = logging.getLogger(__name__)

DATA_TYPE_COLUMNS = (
    "id",
    "name",
    "slug",
    "display_name_singular",
    "display_name_plural",
    "icon",
    "model_name",
)

DATA_ROW_COLUMNS = (
    "id",
    "data_type_id",
    "field",
    "type",
    "display_name",
    "required",
    "browse",
    "read",
    "edit",
    "add",
    "delete",
    "details",
    "order",
)

# --- Django Setup Helper ---
_django_setup_done = False


def setup_django(db_settings: Dict[str, Any], secret_key: str):
    """Configures minimal Django settings and runs django.setup()."""
    global _django_setup_done
    if _django_setup_done or settings.configured:
        logger.debug("Django setup already performed.")
        _django_setup_done = True
        return

    logger.info("Configuring Django settings for the Voyager database...")
    try:
        plain_db_settings: Dict[str, Dict[str, Any]] = {}
        for alias, db_model in db_settings.items():
            if hasattr(db_model, "model_dump") and callable(db_model.model_dump):
                # Exclude None values so Django applies its own defaults
                plain_db_settings[alias] = db_model.model_dump(exclude_none=True)
            elif isinstance(db_model, dict):
                plain_db_settings[alias] = db_model
            else:
                logger.error(
                    f"Unexpected type for database settings '{alias}': {type(db_model)}. "
                    "Expected Pydantic model or dict."
                )
                raise TypeError(f"Invalid database settings type for alias '{alias}'.")
        logger.debug(f"Using database aliases for Django: {list(plain_db_settings)}")

        settings.configure(
            SECRET_KEY=secret_key,
            DATABASES=plain_db_settings,
            TIME_ZONE='UTC',
            USE_TZ=True,
            DEFAULT_AUTO_FIELD='django.db.models.BigAutoField',
        )
        django.setup()
        _django_setup_done = True
        logger.info("Django setup complete.")
    except Exception as e:
        logger.error(f"Failed to configure Django: {e}", exc_info=True)
        raise


def _fetch_records(cursor, columns: Sequence[str]) -> List[Dict[str, Any]]:
    rows = cursor.fetchall()
    return [dict(zip(columns, row)) for row in rows]


def _select_columns(conn, columns: Sequence[str]) -> str:
    return ", ".join(conn.ops.quote_name(column) for column in columns)


def find_missing_voyager_tables(db_alias: str = DEFAULT_DB_ALIAS) -> List[str]:
    """Return the Voyager metadata tables absent from the database."""
    conn = connections[db_alias]
    with conn.cursor() as cursor:
        existing = set(conn.introspection.table_names(cursor))
    missing = [table for table in VoyagerTables.REQUIRED if table not in existing]
    logger.debug(f"Voyager tables missing from '{db_alias}': {missing}")
    return missing


def check_voyager_tables(db_alias: str = DEFAULT_DB_ALIAS) -> bool:
    """True when both ``data_types`` and ``data_rows`` exist."""
    return not find_missing_voyager_tables(db_alias)


def ensure_voyager_tables(db_alias: str = DEFAULT_DB_ALIAS) -> None:
    """Raise VoyagerTablesMissingError unless both metadata tables exist."""
    missing = find_missing_voyager_tables(db_alias)
    if missing:
        raise VoyagerTablesMissingError(missing)


def load_data_types(
    models: Optional[List[str]] = None,
    db_alias: str = DEFAULT_DB_ALIAS,
) -> List[DataType]:
    """
    Load the BREAD definitions, optionally restricted to requested models.

    Requested names are matched against ``model_name`` directly or after
    qualification with the conventional model namespaces.
    """
    conn = connections[db_alias]
    qn = conn.ops.quote_name
    sql = f"SELECT {_select_columns(conn, DATA_TYPE_COLUMNS)} FROM {qn(VoyagerTables.DATA_TYPES)}"
    params: List[Any] = []

    if models:
        candidates = qualify_model_names(models)
        logger.debug(f"Model name candidates: {candidates}")
        if not candidates:
            return []
        placeholders = ", ".join(["%s"] * len(candidates))
        sql += f" WHERE {qn('model_name')} IN ({placeholders})"
        params.extend(candidates)
    sql += f" ORDER BY {qn('id')}"

    with conn.cursor() as cursor:
        cursor.execute(sql, params)
        records = _fetch_records(cursor, DATA_TYPE_COLUMNS)

    data_types = [
        DataType(
            id=record["id"],
            model_name=record["model_name"] or "",
            name=record["name"] or "",
            slug=record["slug"] or "",
            display_name_singular=record["display_name_singular"] or "",
            display_name_plural=record["display_name_plural"] or "",
            icon=record["icon"] or None,
        )
        for record in records
    ]
    logger.info(f"Found {len(data_types)} Voyager BREAD configurations.")
    return data_types


def load_data_rows(
    data_type_id: int,
    field_type: Optional[str] = None,
    db_alias: str = DEFAULT_DB_ALIAS,
) -> List[DataRow]:
    """Load the field rows of a data type in their stored order."""
    conn = connections[db_alias]
    qn = conn.ops.quote_name
    sql = (
        f"SELECT {_select_columns(conn, DATA_ROW_COLUMNS)} FROM {qn(VoyagerTables.DATA_ROWS)}"
        f" WHERE {qn('data_type_id')} = %s"
    )
    params: List[Any] = [data_type_id]
    if field_type is not None:
        sql += f" AND {qn('type')} = %s"
        params.append(field_type)
    sql += f" ORDER BY {qn('order')}, {qn('id')}"

    with conn.cursor() as cursor:
        cursor.execute(sql, params)
        records = _fetch_records(cursor, DATA_ROW_COLUMNS)

    return [DataRow.from_record(record) for record in records]


def load_relationship_rows(data_type_id: int, db_alias: str = DEFAULT_DB_ALIAS) -> List[DataRow]:
    """Load only the ``relationship`` rows of a data type."""
    return load_data_rows(data_type_id, field_type="relationship", db_alias=db_alias)

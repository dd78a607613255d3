"""Content generators."""

from gavel.generators.catalog import (
    generate_catalog_records,
    generate_player_record,
)

__all__ = [
    "generate_catalog_records",
    "generate_player_record",
]

"""Declaration ingestion exports."""

from .declaration_reader import (
    DeclarationDocument,
    DeclarationFormatError,
    parse_declaration,
    parse_declaration_document,
    parse_declarations,
    read_declarations,
)
from .declaration_writer import (
    dump_declaration,
    dump_declarations,
    dump_document,
    write_declarations,
)

__all__ = [
    "DeclarationDocument",
    "DeclarationFormatError",
    "dump_declaration",
    "dump_declarations",
    "dump_document",
    "parse_declaration",
    "parse_declaration_document",
    "parse_declarations",
    "read_declarations",
    "write_declarations",
]

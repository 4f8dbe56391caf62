"""Format-agnostic document model and its assembler."""

from __future__ import annotations

from fce_synthesis.assembler.assembler import DEFAULT_BUILDERS, DocumentAssembler
from fce_synthesis.assembler.builders import AssemblyContext, sit_stand_timeline
from fce_synthesis.assembler.models import (
    Bar,
    Block,
    BlockKind,
    DocumentModel,
    Field,
    ImageRef,
    Section,
    Table,
)
from fce_synthesis.assembler.test_blocks import TestTemplate, cardio_protocol, select_template

__all__ = [
    "DEFAULT_BUILDERS",
    "AssemblyContext",
    "Bar",
    "Block",
    "BlockKind",
    "DocumentAssembler",
    "DocumentModel",
    "Field",
    "ImageRef",
    "Section",
    "Table",
    "TestTemplate",
    "cardio_protocol",
    "select_template",
    "sit_stand_timeline",
]

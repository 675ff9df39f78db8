"""State shared by the generators during one run."""

from dataclasses import dataclass, field

from .config import CodeGenConfig
from .ir import IRSchema
from .operations import OperationDocument
from .registry import NameRegistry
from .scalars import ScalarRegistry
from .shortener import ClassnameShortener


@dataclass
class GenerationContext:
    """Inputs and run-scoped state handed to every generator.

    A fresh context means a fresh name registry and shortener, so two runs
    never see each other's names.
    """
    config: CodeGenConfig
    schema: IRSchema
    operations: OperationDocument | None = None
    scalars: ScalarRegistry = field(default_factory=ScalarRegistry)
    registry: NameRegistry = field(default_factory=NameRegistry)
    shortener: ClassnameShortener = field(default_factory=ClassnameShortener)

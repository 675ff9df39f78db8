"""Entry point tying schema, configuration and generators together.

Example usage:
    from gql_projections.core import CodeGen, CodeGenConfig, SchemaParser

    schema = SchemaParser("schema/").parse_all()
    result = CodeGen(schema, CodeGenConfig(package_name="moviesclient")).generate()
    for unit in result.client_projections:
        print(unit.qualified_name)
"""

import logging

from .client_api_generator import ClientApiGenerator
from .config import CodeGenConfig
from .context import GenerationContext
from .hooks import HookRunner
from .ir import IRSchema, TypeKind
from .operations import OperationDocument
from .scalars import ScalarRegistry
from .specs import CodeGenResult

logger = logging.getLogger(__name__)


class CodeGen:
    """Runs one generation over a schema."""

    def __init__(
        self,
        schema: IRSchema,
        config: CodeGenConfig | None = None,
        operations: OperationDocument | None = None,
        scalars: ScalarRegistry | None = None,
        hooks: HookRunner | None = None,
    ):
        self.schema = schema
        self.config = config or CodeGenConfig()
        self.operations = operations
        self.scalars = scalars or ScalarRegistry()
        self.hooks = hooks or HookRunner()

    def generate(self) -> CodeGenResult:
        """Generate query classes, projections and data types.

        Raises:
            SchemaError: if an operation root field returns an unknown type
        """
        schema = self.hooks.run_pre_hooks(self.schema)
        context = GenerationContext(
            config=self.config,
            schema=schema,
            operations=self.operations,
            scalars=self.scalars,
        )
        generator = ClientApiGenerator(context)

        result = CodeGenResult()
        for operation_type, root_name in schema.operation_types.items():
            root_type = schema.find_type(root_name)
            if root_type is None or root_type.kind is not TypeKind.OBJECT:
                continue
            logger.debug("Generating %s root %s", operation_type, root_name)
            result = result.merge(generator.generate(root_type))
        result = result.merge(generator.generate_entities(schema.types_of_kind(TypeKind.OBJECT)))

        logger.info(
            "Generated %d query classes, %d projections, %d data types",
            len(result.query_types),
            len(result.client_projections),
            len(result.data_types),
        )
        return result

"""Rendering of generation results into Python modules.

Renders Jinja2 templates to produce Python code from a ``CodeGenResult``.

Supports custom templates via the template_dir parameter:
    generator = CodeGenerator(result, config, output_dir, template_dir="./my_templates")

Template lookup order:
1. User's template directory (if provided)
2. Package default templates
"""

import ast
import logging
import re
from pathlib import Path
from typing import Any, Dict, List, Optional

from jinja2 import ChoiceLoader, Environment, FileSystemLoader, PackageLoader, select_autoescape

from .config import CodeGenConfig
from .hooks import HookRunner
from .specs import (
    ArgumentSpec,
    CodeGenResult,
    DataFieldSpec,
    DataKind,
    QueryClassSpec,
    UnitCategory,
)
from .type_utils import pascal_case, safe_param_name, snake_case

logger = logging.getLogger(__name__)

# Module name and template per unit category
MODULES = {
    UnitCategory.QUERY: ("queries", "queries.py.j2"),
    UnitCategory.PROJECTION: ("projections", "projections.py.j2"),
    UnitCategory.DATA_TYPE: ("models", "models.py.j2"),
}


def safe_docstring(text: str) -> str:
    """Escape text for use in docstrings."""
    if not text:
        return ""
    text = text.replace("\\", "\\\\").replace('"""', '\\"\\"\\"')
    if text.endswith('"'):
        text += " "
    return text


def safe_comment(text: str) -> str:
    """Make text safe for a single-line Python comment.

    Removes newlines, replaces markdown formatting, and ensures
    the text doesn't cause syntax errors when used as # comment.
    """
    if not text:
        return ""
    text = text.replace('\n', ' ').replace('\r', '')
    text = text.replace('**', '').replace('*', '')
    text = re.sub(r'\s+', ' ', text)
    if len(text) > 120:
        text = text[:117] + "..."
    return text.strip()


def keyword_parameters(arguments: List[ArgumentSpec], default: str = "UNSET") -> str:
    """Parameter list of a projection method: ``self, *, a: T = UNSET``."""
    if not arguments:
        return "self"
    params = ", ".join(f"{a.param_name}: {a.type_hint} = {default}" for a in arguments)
    return f"self, *, {params}"


def query_parameters(query: QueryClassSpec) -> str:
    """Parameter list of a query class constructor."""
    if not query.arguments:
        return "self, query_name: Optional[str] = None"
    params = [f"{a.param_name}: {a.type_hint} = None" for a in query.arguments]
    params.append(f"{query.fields_set_param}: Optional[Set[str]] = None")
    params.append("query_name: Optional[str] = None")
    return "self, *, " + ", ".join(params)


def input_arguments(arguments: List[ArgumentSpec]) -> str:
    """``[InputArgument("name", name), ...]`` for a projection method body."""
    items = ", ".join(f"InputArgument({a.name!r}, {a.param_name})" for a in arguments)
    return f"[{items}]"


def field_declaration(data_field: DataFieldSpec) -> str:
    """Class-body declaration of a pydantic model field."""
    declaration = f"{data_field.name}: {data_field.type_hint}"
    if data_field.required:
        if data_field.alias:
            return f"{declaration} = Field(alias={data_field.alias!r})"
        return declaration
    if data_field.alias:
        return f"{declaration} = Field(default=None, alias={data_field.alias!r})"
    return f"{declaration} = None"


class CodeGenerator:
    """Writes the units of a ``CodeGenResult`` as a Python package.

    Units are grouped by namespace into ``queries.py``, ``projections.py``
    and ``models.py``; every package directory gets an ``__init__.py``
    re-exporting its modules.

    Available templates to override:
        - queries.py.j2: Query classes with builders
        - projections.py.j2: Projection and fragment classes
        - models.py.j2: Pydantic models and enums

    Example:
        generator = CodeGenerator(
            result=CodeGen(schema, config).generate(),
            config=config,
            output_dir="./generated",
            template_dir="./my_templates",
        )
        generator.generate()
    """

    def __init__(
        self,
        result: CodeGenResult,
        config: CodeGenConfig,
        output_dir: str,
        template_dir: Optional[str] = None,
        hooks: Optional[HookRunner] = None,
    ):
        """Initialize the code generator.

        Args:
            result: The units produced by ``CodeGen.generate``
            config: The configuration the result was generated with
            output_dir: Directory the generated package is written into
            template_dir: Optional directory with custom Jinja2 templates.
                          Templates here override the built-in templates.
            hooks: Optional hooks applied to every rendered module
        """
        self.result = result
        self.config = config
        self.output_dir = output_dir
        self.template_dir = template_dir
        self.hooks = hooks or HookRunner()

        # Build template loader - custom templates take precedence
        loaders = []
        if template_dir:
            template_path = Path(template_dir)
            if template_path.is_dir():
                loaders.append(FileSystemLoader(str(template_path)))
        loaders.append(PackageLoader("gql_projections", "templates"))

        self.env = Environment(
            loader=ChoiceLoader(loaders),
            autoescape=select_autoescape(),
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )
        # Register custom filters
        self.env.filters["snake_case"] = snake_case
        self.env.filters["pascal_case"] = pascal_case
        self.env.filters["repr"] = repr
        self.env.filters["safe_docstring"] = safe_docstring
        self.env.filters["safe_comment"] = safe_comment
        self.env.filters["safe_param"] = safe_param_name
        self.env.filters["keyword_parameters"] = keyword_parameters
        self.env.filters["query_parameters"] = query_parameters
        self.env.filters["input_arguments"] = input_arguments
        self.env.filters["field_declaration"] = field_declaration

    def render(self) -> Dict[str, str]:
        """Render every module; return ``{relative path: source}``."""
        files: Dict[str, str] = {}
        modules_by_package: Dict[str, List[str]] = {}

        for namespace, category, units in self._group_units():
            module, template_name = MODULES[category]
            package_dir = namespace.replace(".", "/")
            path = f"{package_dir}/{module}.py"
            files[path] = self._render_file(template_name, path, self._context(category, units))
            modules_by_package.setdefault(namespace, []).append(module)

        for path, content in self._init_files(modules_by_package).items():
            files[path] = self.hooks.run_post_hooks(path, content)
        return dict(sorted(files.items()))

    def generate(self) -> List[Path]:
        """Render and write all modules; return the written paths."""
        written = []
        for relative, content in self.render().items():
            full_path = Path(self.output_dir) / relative
            full_path.parent.mkdir(parents=True, exist_ok=True)
            full_path.write_text(content)
            written.append(full_path)
        logger.info("Wrote %d files to %s", len(written), self.output_dir)
        return written

    def _group_units(self):
        groups: Dict[tuple, list] = {}
        for unit in self.result.units():
            groups.setdefault((unit.namespace, unit.category), []).append(unit.spec)
        for (namespace, category), specs in groups.items():
            yield namespace, category, specs

    def _context(self, category: UnitCategory, specs: list) -> Dict[str, Any]:
        imports = sorted({statement for spec in specs for statement in spec.imports})
        types_module = self.config.package_name_types
        if not any(unit.namespace == types_module for unit in self.result.data_types):
            types_module = None
        if category is UnitCategory.QUERY:
            return {"queries": specs, "imports": imports, "types_module": types_module}
        if category is UnitCategory.PROJECTION:
            return {"projections": specs, "imports": imports, "types_module": types_module}
        return {
            "enums": [s for s in specs if s.kind is DataKind.ENUM],
            "inputs": [s for s in specs if s.kind is DataKind.INPUT],
            "models": [s for s in specs if s.kind is DataKind.MODEL],
            "imports": imports,
        }

    def _render_file(self, template_name: str, output_path: str, context: Dict[str, Any]) -> str:
        """Render a template, validate the Python and run post hooks."""
        template = self.env.get_template(template_name)
        content = template.render(context)

        try:
            ast.parse(content)
        except SyntaxError as e:
            raise ValueError(
                f"Generated invalid Python for {output_path}: {e}\n"
                f"Template: {template_name}"
            )
        return self.hooks.run_post_hooks(output_path, content)

    def _init_files(self, modules_by_package: Dict[str, List[str]]) -> Dict[str, str]:
        """``__init__.py`` for every package directory, re-exporting its modules."""
        packages: Dict[str, List[str]] = {}
        for namespace, modules in modules_by_package.items():
            parts = namespace.split(".")
            for i in range(1, len(parts)):
                packages.setdefault(".".join(parts[:i]), [])
            packages.setdefault(namespace, []).extend(modules)
        if not packages:
            packages[self.config.package_name] = []

        files = {}
        for package, modules in packages.items():
            lines = ['"""Generated GraphQL client package."""']
            if modules:
                lines.append("")
                lines.extend(f"from .{m} import *  # noqa: F401,F403" for m in modules)
            files[f"{package.replace('.', '/')}/__init__.py"] = "\n".join(lines) + "\n"
        return files

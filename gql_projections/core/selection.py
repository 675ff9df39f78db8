"""Field and type filtering for projection generation.

Decides which schema fields become projection methods and which concrete
types of an interface or union get fragment classes. The rules, in order:

1. Fields carrying a skip directive are dropped unconditionally.
2. Include/exclude lists from the config (exclude wins).
3. With an example selection at the current position, only the selected
   fields survive, in the order they were selected.
"""

import logging

from .config import CodeGenConfig
from .ir import IRField, IRType
from .operations import Selection

logger = logging.getLogger(__name__)


def _matches(names: set[str], type_name: str, field_name: str) -> bool:
    return field_name in names or f"{type_name}.{field_name}" in names


class SelectionFilter:
    """Applies skip directives, config lists and example selections."""

    def __init__(self, config: CodeGenConfig):
        self.config = config

    def select_fields(
        self,
        type_def: IRType,
        fields: list[IRField],
        selection: Selection | None = None,
        root: bool = False,
    ) -> list[IRField]:
        """Return the fields of ``type_def`` to generate, in order.

        Root operation fields are restricted by the per-operation include
        lists (``filter_operations``), not by ``include_fields``.
        """
        allowed = self.filter_included_in_config(type_def.name, self.filter_skipped(fields), root)
        if selection is None:
            return allowed
        return self.filter_selected_fields(type_def, fields, allowed, selection)

    def filter_skipped(self, fields: list[IRField]) -> list[IRField]:
        return [
            f for f in fields
            if not any(f.has_directive(d) for d in self.config.skip_directives)
        ]

    def restricts(self, type_name: str, fields: list[IRField]) -> bool:
        """True if ``include_fields`` names this type or one of its fields.

        ``Movie.title`` restricts only ``Movie``; a bare ``title`` restricts
        every type that has a ``title`` field. Other types keep all fields.
        """
        include = self.config.include_fields
        if not include:
            return False
        if any(name.partition(".")[0] == type_name for name in include if "." in name):
            return True
        return any(f.name in include for f in fields)

    def filter_included_in_config(
        self,
        type_name: str,
        fields: list[IRField],
        root: bool = False,
    ) -> list[IRField]:
        config = self.config
        restricted = not root and self.restricts(type_name, fields)
        result = []
        for ir_field in fields:
            if _matches(config.exclude_fields, type_name, ir_field.name):
                continue
            if restricted and not _matches(config.include_fields, type_name, ir_field.name):
                continue
            if ir_field.type_name in config.exclude_types:
                continue
            result.append(ir_field)
        return result

    def filter_selected_fields(
        self,
        type_def: IRType,
        fields: list[IRField],
        allowed: list[IRField],
        selection: Selection,
    ) -> list[IRField]:
        """Keep the allowed fields named by ``selection``, in selection order."""
        allowed_by_name = {f.name: f for f in allowed}
        declared = {f.name for f in fields}
        result = []
        for selected in selection.fields_for(type_def.name):
            ir_field = allowed_by_name.get(selected.name)
            if ir_field is not None:
                result.append(ir_field)
            elif selected.name in declared:
                logger.warning(
                    "Example operation selects %s.%s but the configuration excludes it; "
                    "the field is not generated",
                    type_def.name,
                    selected.name,
                )
        return result

    def filter_operations(self, operation_type: str, fields: list[IRField]) -> list[IRField]:
        """Apply the include list for root fields of one operation type."""
        included = self.config.included_operations(operation_type)
        if not included:
            return fields
        return [f for f in fields if f.name in included]

    def select_concrete_types(
        self,
        candidates: list[IRType],
        selection: Selection | None = None,
    ) -> list[IRType]:
        """Return the implementations / members that get fragment classes."""
        candidates = [t for t in candidates if t.name not in self.config.exclude_types]
        if selection is None:
            return candidates
        by_name = {t.name: t for t in candidates}
        return [by_name[name] for name in selection.fragment_types() if name in by_name]

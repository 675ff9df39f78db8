"""Configuration for a code generation run."""

from dataclasses import dataclass, field

UNLIMITED_DEPTH = -1


@dataclass
class CodeGenConfig:
    """Options recognized by the projection generator.

    Example:
        config = CodeGenConfig(
            package_name="moviesclient",
            max_projection_depth=3,
            short_projection_names=True,
            exclude_fields={"Movie.internalNotes"},
        )
    """
    package_name: str = "generated"
    sub_package_name_client: str = "client"
    sub_package_name_types: str = "types"
    # Nesting limit below a root projection; UNLIMITED_DEPTH disables it
    max_projection_depth: int = 10
    short_projection_names: bool = False
    skip_entity_queries: bool = False
    generate_data_types: bool = True
    # Root field allow lists per operation type (empty means all)
    include_queries: set[str] = field(default_factory=set)
    include_mutations: set[str] = field(default_factory=set)
    include_subscriptions: set[str] = field(default_factory=set)
    # Field names, either bare ("title") or qualified ("Movie.title")
    include_fields: set[str] = field(default_factory=set)
    exclude_fields: set[str] = field(default_factory=set)
    exclude_types: set[str] = field(default_factory=set)
    skip_directives: set[str] = field(default_factory=lambda: {"skipcodegen"})
    entity_key_directive: str = "key"

    def __post_init__(self):
        if self.max_projection_depth < UNLIMITED_DEPTH:
            raise ValueError(
                f"max_projection_depth must be >= 0 or {UNLIMITED_DEPTH} (unlimited), "
                f"got {self.max_projection_depth}"
            )
        for name in ("package_name", "sub_package_name_client", "sub_package_name_types"):
            value = getattr(self, name)
            if not value or not all(part.isidentifier() for part in value.split(".")):
                raise ValueError(f"{name} must be a dotted Python identifier, got {value!r}")

    @property
    def package_name_client(self) -> str:
        return f"{self.package_name}.{self.sub_package_name_client}"

    @property
    def package_name_types(self) -> str:
        return f"{self.package_name}.{self.sub_package_name_types}"

    @property
    def unlimited_depth(self) -> bool:
        return self.max_projection_depth == UNLIMITED_DEPTH

    def included_operations(self, operation_type: str) -> set[str]:
        """Return the allow list for 'query', 'mutation' or 'subscription'."""
        return {
            "query": self.include_queries,
            "mutation": self.include_mutations,
            "subscription": self.include_subscriptions,
        }.get(operation_type, set())

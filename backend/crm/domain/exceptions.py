"""Domain-specific exceptions — framework-independent."""


class EntityNotFoundError(Exception):
    """Raised when a requested entity does not exist."""

    def __init__(self, entity_type: str, entity_id: int | str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} with id '{entity_id}' not found")


class DuplicateEntityError(Exception):
    """Raised when attempting to create a duplicate entity."""

    def __init__(self, entity_type: str, field: str, value: str):
        self.entity_type = entity_type
        self.field = field
        self.value = value
        super().__init__(f"{entity_type} with {field}='{value}' already exists")


class SaveCancelledError(Exception):
    """Raised when a save is cancelled before its commit started.

    Timestamps stamped in memory are left in place; nothing was written.
    """

    def __init__(self, pending: int = 0):
        self.pending = pending
        super().__init__(f"Save cancelled before commit ({pending} pending change(s) kept)")


class SchemaConfigurationError(Exception):
    """Raised when the schema configuration cannot produce indexable keys."""


class SchemaConflictError(Exception):
    """Raised at startup when a declared column disagrees with the physical table."""

    def __init__(self, table: str, column: str, declared: int | None, actual: int | None):
        self.table = table
        self.column = column
        self.declared = declared
        self.actual = actual
        super().__init__(
            f"Column {table}.{column} is declared with length {declared} "
            f"but the database has {actual}"
        )

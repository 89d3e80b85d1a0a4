"""
Exception types raised by the sqlcraft query builders and their collaborators.
"""

from __future__ import annotations


class SqlCraftError(Exception):
    """Base class for every error raised by this package."""


class EntityDefinitionError(SqlCraftError):
    """
    An entity class is declared inconsistently, e.g. a between/in tag names a
    companion field the entity does not have.
    """


class SchemaError(SqlCraftError):
    """The entity cannot be projected: not registered, or no table name."""


class EmptyProjectionError(SchemaError):
    """Every field of the entity was transient or ignored."""


class DialectError(SqlCraftError):
    """The configured driver class name matches no supported dialect."""


class BindingError(SqlCraftError):
    """A request payload could not be bound onto an entity."""


class RegistryError(SqlCraftError):
    """The entity configuration file is missing or malformed."""


class PredicateBuildError(SqlCraftError):
    """
    Raised by PredicateResult.raise_for_status() when one or more fields
    failed to produce their predicates.
    """

    def __init__(self, diagnostics):
        self.diagnostics = list(diagnostics)
        detail = "; ".join(f"{d.field}: {d.message}" for d in self.diagnostics)
        super().__init__(f"predicate build failed for {len(self.diagnostics)} field(s): {detail}")

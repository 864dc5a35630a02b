class SimpletonsError(Exception):
    """Base for all simpletons exceptions."""

    pass


# High-level families
class ValidationError(SimpletonsError):
    """Data validation failures."""

    pass


class StorageError(SimpletonsError):
    """Population storage failures."""

    pass


class TreeStructureError(SimpletonsError):
    """Body tree contract violations."""

    pass


class MutationError(SimpletonsError):
    """Mutation failures."""

    pass


# Tree subtypes
class InvalidNodeError(TreeStructureError, LookupError):
    """Raised when a node handle does not belong to the tree."""

    pass


class TreeValidationError(ValidationError):
    """Raised when stored parent links do not form a single rooted tree."""

    pass


# Gene subtypes
class GeneIndexError(SimpletonsError, IndexError):
    """Raised when a gene index is outside a holder's declared count."""

    pass


# Storage subtypes
class PopulationFormatError(StorageError):
    """Malformed or corrupt population document."""

    pass

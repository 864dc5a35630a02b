from simpletons.database.population import Population
from simpletons.database.population_storage import (
    FORMAT_VERSION,
    PopulationArchive,
    PopulationDocument,
    deserialize,
    load,
    save,
    serialize,
)

__all__ = [
    "FORMAT_VERSION",
    "Population",
    "PopulationArchive",
    "PopulationDocument",
    "deserialize",
    "load",
    "save",
    "serialize",
]

from simpletons.genes.mutation import MutationGenerator, mutate_holder
from simpletons.genes.parameter import (
    FACE_COUNT,
    GENE_RANGES,
    Dimension,
    FaceCoord,
    FaceIndex,
    GeneRole,
    MaxSpeed,
    NormalizedParameter,
    ParameterHolder,
    ParamSet3d,
    Rotation,
    Torque,
    build_gene_layout,
)

__all__ = [
    "FACE_COUNT",
    "GENE_RANGES",
    "Dimension",
    "FaceCoord",
    "FaceIndex",
    "GeneRole",
    "MaxSpeed",
    "MutationGenerator",
    "NormalizedParameter",
    "ParameterHolder",
    "ParamSet3d",
    "Rotation",
    "Torque",
    "build_gene_layout",
    "mutate_holder",
]

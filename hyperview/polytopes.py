"""
Polytope Catalog
----------------
Closed-form vertex and edge generation for the supported 4D polytopes.

Every generator returns a frozen ``Polytope``. Vertex order defines index
identity: edges are ``(i, j)`` pairs into that order, and the morph buffer
relies on it staying fixed. Shapes are generated once and cached.
"""

from __future__ import annotations

import itertools
import logging
import math
from dataclasses import dataclass

import numpy as np
from scipy.spatial.distance import pdist, squareform

from hyperview.errors import UnknownShapeError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Polytope:
    id: str
    name: str
    description: str
    vertices: np.ndarray
    edges: tuple

    @property
    def vertex_count(self) -> int:
        return int(self.vertices.shape[0])

    @property
    def edge_count(self) -> int:
        return len(self.edges)


def _freeze(vertex_list):
    vertices = np.array(vertex_list, dtype=np.float64).reshape(-1, 4)
    vertices.setflags(write=False)
    return vertices


def _pairs_where(mask):
    """Upper-triangle index pairs (i < j) where ``mask`` holds."""
    rows, cols = np.nonzero(np.triu(mask, k=1))
    return tuple((int(i), int(j)) for i, j in zip(rows, cols))


def _hamming_one_edges(vertices):
    # Sign patterns differing in exactly one coordinate.
    diffs = squareform(pdist(vertices, metric="hamming")) * vertices.shape[1]
    return _pairs_where(np.isclose(diffs, 1.0))


def _complete_edges(count, offset=0):
    return tuple((offset + i, offset + j) for i, j in itertools.combinations(range(count), 2))


def _signed_cube(count_axes):
    # Bit k of the index selects the sign of axis k.
    return [
        [1.0 if (i >> axis) & 1 else -1.0 for axis in range(count_axes)]
        for i in range(2 ** count_axes)
    ]


# -------------------------------
# Generators
# -------------------------------
def generate_tesseract():
    vertices = _freeze(_signed_cube(4))
    return Polytope(
        id="tesseract",
        name="Tesseract (Hypercube)",
        description=(
            "The four-dimensional analogue of the cube. It has 16 vertices, "
            "32 edges, 24 square faces, and 8 cubic cells."
        ),
        vertices=vertices,
        edges=_hamming_one_edges(vertices),
    )


def generate_pentachoron():
    base_w = -1 / math.sqrt(5)
    vertices = _freeze([
        [1, 1, 1, base_w],
        [1, -1, -1, base_w],
        [-1, 1, -1, base_w],
        [-1, -1, 1, base_w],
        [0, 0, 0, 4 / math.sqrt(5)],  # apex
    ])
    return Polytope(
        id="pentachoron",
        name="Pentachoron (5-Cell)",
        description=(
            "The simplest regular 4-polytope, analogous to a tetrahedron. "
            "It has 5 vertices and 10 edges."
        ),
        vertices=vertices,
        edges=_complete_edges(5),
    )


def generate_16cell():
    vertex_list = []
    for axis in range(4):
        for sign in (1.0, -1.0):
            v = [0.0, 0.0, 0.0, 0.0]
            v[axis] = sign
            vertex_list.append(v)
    vertices = _freeze(vertex_list)
    dots = vertices @ vertices.T
    return Polytope(
        id="16-cell",
        name="16-Cell (Orthoplex)",
        description=(
            "The dual of the tesseract. It is the 4D analogue of the "
            "octahedron. It has 8 vertices and 24 edges."
        ),
        vertices=vertices,
        edges=_pairs_where(np.abs(dots) < 0.1),
    )


def generate_24cell():
    vertex_list = []
    for i, j in itertools.combinations(range(4), 2):
        for si, sj in ((1, 1), (1, -1), (-1, 1), (-1, -1)):
            v = [0.0, 0.0, 0.0, 0.0]
            v[i] = si
            v[j] = sj
            vertex_list.append(v)
    vertices = _freeze(vertex_list)
    dist_sq = squareform(pdist(vertices, metric="sqeuclidean"))
    return Polytope(
        id="24-cell",
        name="24-Cell",
        description=(
            "A unique regular 4-polytope with no 3D analogue. It is "
            "self-dual and composed of 24 octahedral cells."
        ),
        vertices=vertices,
        edges=_pairs_where(np.abs(dist_sq - 2.0) < 0.01),
    )


def generate_tetrahedral_prism():
    base = [[1, 1, 1], [1, -1, -1], [-1, 1, -1], [-1, -1, 1]]
    vertices = _freeze([b + [-1] for b in base] + [b + [1] for b in base])
    edges = _complete_edges(4) + _complete_edges(4, offset=4)
    edges += tuple((i, i + 4) for i in range(4))
    return Polytope(
        id="tetra-prism",
        name="Tetrahedral Prism",
        description="A prism constructed by extruding a tetrahedron into the fourth dimension.",
        vertices=vertices,
        edges=edges,
    )


def generate_cubic_pyramid():
    cube = [v + [-0.5] for v in _signed_cube(3)]
    vertices = _freeze(cube + [[0, 0, 0, 1.2]])
    apex = len(cube)
    # w is constant across the cube, so it never contributes to the distance.
    edges = _hamming_one_edges(vertices[:apex, :3])
    edges += tuple((i, apex) for i in range(apex))
    return Polytope(
        id="cubic-pyramid",
        name="Cubic Pyramid",
        description=(
            "A 4D pyramid bounded by one cube and 6 square pyramids, "
            "converging to an apex."
        ),
        vertices=vertices,
        edges=edges,
    )


GENERATORS = {
    "tesseract": generate_tesseract,
    "pentachoron": generate_pentachoron,
    "16-cell": generate_16cell,
    "24-cell": generate_24cell,
    "tetra-prism": generate_tetrahedral_prism,
    "cubic-pyramid": generate_cubic_pyramid,
}

ALIASES = {
    "hexadecachoron": "16-cell",
    "icositetrachoron": "24-cell",
    "tetraPrism": "tetra-prism",
    "cubicPyramid": "cubic-pyramid",
}

# Hotkey -> shape id, in catalog order.
POLYTOPE_GENERATORS = {str(n): shape_id for n, shape_id in enumerate(GENERATORS, start=1)}

_catalog = {}


def resolve_shape_id(shape_id) -> str:
    if shape_id in GENERATORS:
        return shape_id
    if shape_id in ALIASES:
        return ALIASES[shape_id]
    raise UnknownShapeError(shape_id, known=GENERATORS)


def get_polytope(shape_id) -> Polytope:
    """Return the cached polytope for ``shape_id``, generating it on first use."""
    shape_id = resolve_shape_id(shape_id)
    if shape_id not in _catalog:
        polytope = GENERATORS[shape_id]()
        logger.debug(
            "Generated polytope %s: %d vertices, %d edges",
            shape_id, polytope.vertex_count, polytope.edge_count,
        )
        _catalog[shape_id] = polytope
    return _catalog[shape_id]


def all_polytopes():
    return [get_polytope(shape_id) for shape_id in GENERATORS]


def shape_ids():
    return list(GENERATORS)

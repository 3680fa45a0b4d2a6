import importlib

import pytest

MODULES = [
    "kcentroids",
    "kcentroids.base",
    "kcentroids.base.interfaces",
    "kcentroids.base.data_structures",
    "kcentroids.base.clustering_base",
    "kcentroids.distances",
    "kcentroids.distances.euclidean",
    "kcentroids.initialization",
    "kcentroids.initialization.kmeans_plusplus",
    "kcentroids.initialization.random",
    "kcentroids.initialization.from_previous",
    "kcentroids.assignments",
    "kcentroids.assignments.hard",
    "kcentroids.updates",
    "kcentroids.updates.mean",
    "kcentroids.parallel",
    "kcentroids.parallel.executor",
    "kcentroids.algorithms",
    "kcentroids.algorithms.kmeans",
    "kcentroids.utils",
    "kcentroids.utils.convergence",
    "kcentroids.utils.validation",
    "kcentroids.utils.device",
    "kcentroids.utils.metrics",
    "kcentroids.utils.selection",
    "kcentroids.utils.io",
]


@pytest.mark.parametrize("mod", MODULES)
def test_module_imports(mod):
    importlib.import_module(mod)


def test_public_api():
    import kcentroids

    for name in kcentroids.__all__:
        assert hasattr(kcentroids, name), f"kcentroids.{name} missing"
    assert kcentroids.__version__ == "0.1.0"

def test_package_modules_present():
    import importlib

    for mod in [
        "pointset",
        "pointset.geometry",
        "pointset.index",
        "pointset.index.kdtree",
        "pointset.index.ordered",
        "pointset.io",
        "pointset.cfg",
        "pointset.cli",
        "pointset.cli.app",
        "pointset.benchmarks",
        "pointset.utils",
        "pointset.__main__",
    ]:
        assert importlib.import_module(mod) is not None


def test_top_level_exports():
    import pointset

    for name in pointset.__all__:
        assert hasattr(pointset, name)

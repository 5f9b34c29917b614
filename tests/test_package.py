"""Import smoke tests: every public module loads and exposes its entry points."""

import importlib

import pytest


class TestPackageImport:
    @pytest.mark.parametrize(
        "module",
        [
            "techradar",
            "techradar.model",
            "techradar.content",
            "techradar.authoring",
            "techradar.importer",
            "techradar.build",
            "techradar.validation",
            "techradar.cli.app",
        ],
    )
    def test_imports(self, module):
        assert importlib.import_module(module) is not None

    def test_version(self):
        import techradar

        assert techradar.__version__ == "0.1.0"

    def test_named_logger(self):
        from techradar.core.logging import get_logger

        logger = get_logger("techradar.smoke")
        assert callable(logger.info)

    def test_quadrants_only_from_config(self):
        """Quadrant labels come from radar.config.yml; the model ships no defaults."""
        import techradar.model

        assert not hasattr(techradar.model, "DEFAULT_QUADRANTS")

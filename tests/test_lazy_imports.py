"""Tests for petrel's lazy top-level API."""

import importlib

import pytest

import petrel


class TestLazyImports:
    @pytest.mark.parametrize("name", petrel.__all__)
    def test_every_public_name_resolves(self, name: str) -> None:
        assert getattr(petrel, name) is not None

    def test_same_objects_as_submodules(self) -> None:
        from petrel.build.site import Site
        from petrel.dispatch.dispatcher import Dispatcher

        assert petrel.Site is Site
        assert petrel.Dispatcher is Dispatcher

    def test_unknown_name(self) -> None:
        with pytest.raises(AttributeError):
            petrel.DoesNotExist  # noqa: B018

    def test_version(self) -> None:
        assert importlib.import_module("petrel").__version__ == "0.1.0"

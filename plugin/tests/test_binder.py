"""Tests for the capability binder and dependency check."""

import logging

import pytest
from fakes import FakeHost

from lavasrc.core.errors import UnresolvedDependencyError
from lavasrc.core.handles import HostHandle
from lavasrc.host import Capability
from lavasrc.services.registration.binder import bind
from lavasrc.services.registration.dependencies import DependencyCheck, DependencyState
from lavasrc.services.registration.descriptors import BackendKind
from lavasrc.services.registration.factory import build


def _build(kind, settings):
    return build(kind, settings, HostHandle("lavasrc", "host source registry"))


class TestBind:
    def test_registers_every_declared_capability(self, host, make_settings):
        instance = _build(BackendKind.SPOTIFY, make_settings("spotify"))

        bound = bind(instance, host.registries)

        assert bound == [Capability.SOURCE, Capability.SEARCH, Capability.LYRICS]
        assert [name for name, _ in host.calls] == ["source", "search", "lyrics"]
        assert all(manager is instance.manager for _, manager in host.calls)

    def test_skips_capabilities_the_backend_lacks(self, host, make_settings):
        instance = _build(BackendKind.APPLE_MUSIC, make_settings("apple_music"))

        bound = bind(instance, host.registries)

        assert bound == [Capability.SOURCE, Capability.SEARCH]
        assert host.registered("lyrics") == []

    def test_source_only_backend(self, host, make_settings):
        instance = _build(BackendKind.YANDEX_MUSIC, make_settings("yandex_music"))

        assert bind(instance, host.registries, (Capability.SEARCH, Capability.LYRICS)) == []
        assert host.calls == []

    def test_restricted_to_one_capability(self, host, make_settings):
        instance = _build(BackendKind.DEEZER, make_settings("deezer"))

        bound = bind(instance, host.registries, (Capability.LYRICS,))

        assert bound == [Capability.LYRICS]
        assert host.registered("lyrics") == [instance.manager]
        assert host.registered("source") == []

    def test_logs_each_registration(self, host, make_settings, caplog):
        instance = _build(BackendKind.DEEZER, make_settings("deezer"))
        with caplog.at_level(logging.INFO, logger="lavasrc"):
            bind(instance, host.registries)
        assert "Registering Deezer audio source manager..." in caplog.text
        assert "Registering Deezer search manager..." in caplog.text
        assert "Registering Deezer lyrics manager..." in caplog.text


class TestDependencyCheck:
    def test_resolves_from_source_registry(self, host, make_settings):
        instance = _build(BackendKind.YOUTUBE, make_settings("youtube"))
        check = DependencyCheck(instance)
        assert check.state == DependencyState.UNRESOLVED

        check.resolve(host.registries.source)

        assert check.state == DependencyState.RESOLVED
        assert instance.dependency.get() is host.youtube

    def test_fails_when_host_source_missing(self, make_settings):
        host = FakeHost(with_youtube=False)
        instance = _build(BackendKind.YOUTUBE, make_settings("youtube"))
        check = DependencyCheck(instance)

        with pytest.raises(UnresolvedDependencyError) as exc_info:
            check.resolve(host.registries.source)

        assert check.state == DependencyState.FAILED
        assert exc_info.value.backend == "youtube"
        assert instance.dependency.is_resolved is False

    def test_runs_only_once(self, host, make_settings):
        check = DependencyCheck(_build(BackendKind.YOUTUBE, make_settings("youtube")))
        check.resolve(host.registries.source)
        with pytest.raises(RuntimeError):
            check.resolve(host.registries.source)

    def test_backend_without_dependency(self, make_settings):
        with pytest.raises(ValueError):
            DependencyCheck(_build(BackendKind.DEEZER, make_settings("deezer")))

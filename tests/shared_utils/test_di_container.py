"""
Tests for shared_utils.di_container.

Covers lazy initialisation, capability probing and full pipeline
wiring. Tool lookups are faked through the ``which`` hook; boto3 is patched.
"""

from unittest.mock import patch

import pytest

from adapters.desktop import NotifySendNotifier, PipeWireSoundPlayer, ZenityConfirmation
from adapters.exiftool_stripper import ExifToolMetadataStripper
from adapters.wayland_clipboard import WaylandClipboardAdapter
from services.pipeline_service import PipelineService
from shared_utils.config_loader import Settings
from shared_utils.di_container import DIContainer
from shared_utils.error_handler import ConfigurationMissingError


def _which_from(installed):
    return lambda tool: f"/usr/bin/{tool}" if tool in installed else None


ALL_TOOLS = {"wl-paste", "wl-copy", "exiftool", "zenity", "notify-send", "pw-cat", "spectacle"}


@pytest.fixture()
def settings(base_settings_kwargs) -> Settings:
    return Settings(**base_settings_kwargs, sound_volume=0.3, filename_length=10)


@pytest.fixture()
def container(settings) -> DIContainer:
    return DIContainer(settings, which=_which_from(ALL_TOOLS))


# ---------------------------------------------------------------------------
# Required tools
# ---------------------------------------------------------------------------


class TestVerifyRequiredTools:
    def test_all_present(self, container) -> None:
        container.verify_required_tools()

    @pytest.mark.parametrize("missing", ["wl-paste", "wl-copy"])
    def test_missing_clipboard_tool(self, settings, missing: str) -> None:
        container = DIContainer(settings, which=_which_from(ALL_TOOLS - {missing}))
        with pytest.raises(ConfigurationMissingError, match=f"{missing} not found. Please install wl-clipboard."):
            container.verify_required_tools()

    def test_has_tool(self, settings) -> None:
        container = DIContainer(settings, which=_which_from({"zenity"}))
        assert container.has_tool("zenity")
        assert not container.has_tool("exiftool")


# ---------------------------------------------------------------------------
# Lazy adapters
# ---------------------------------------------------------------------------


class TestAdapters:
    def test_object_store_lazy_singleton(self, container) -> None:
        with patch("adapters.s3_object_store.boto3.client") as client:
            first = container.get_object_store()
            second = container.get_object_store()
        assert first is second
        assert first.bucket == "cdn"
        client.assert_called_once()
        assert client.call_args[1]["endpoint_url"] == "https://minio.example.com"

    def test_clipboard(self, container) -> None:
        assert isinstance(container.get_clipboard(), WaylandClipboardAdapter)
        assert container.get_clipboard() is container.get_clipboard()

    def test_notifier(self, container) -> None:
        assert isinstance(container.get_notifier(), NotifySendNotifier)

    def test_sound_player_uses_settings(self, container, settings) -> None:
        player = container.get_sound_player()
        assert isinstance(player, PipeWireSoundPlayer)
        assert player._volume == 0.3
        assert player._cache_dir == settings.sound_cache_dir

    def test_stripper_present(self, container) -> None:
        assert isinstance(container.get_metadata_stripper(), ExifToolMetadataStripper)

    def test_stripper_absent_looked_up_once(self, settings) -> None:
        calls = []

        def which(tool):
            calls.append(tool)
            return None

        container = DIContainer(settings, which=which)
        assert container.get_metadata_stripper() is None
        assert container.get_metadata_stripper() is None
        assert calls.count("exiftool") == 1

    def test_confirmation_present(self, container) -> None:
        assert isinstance(container.get_confirmation(), ZenityConfirmation)

    def test_confirmation_absent(self, settings) -> None:
        container = DIContainer(settings, which=_which_from(ALL_TOOLS - {"zenity"}))
        assert container.get_confirmation() is None


# ---------------------------------------------------------------------------
# Pipeline wiring
# ---------------------------------------------------------------------------


class TestPipelineService:
    def test_wired(self, container) -> None:
        with patch("adapters.s3_object_store.boto3.client"):
            pipeline = container.get_pipeline_service()
        assert isinstance(pipeline, PipelineService)
        assert pipeline is container.get_pipeline_service()
        assert pipeline._filename_length == 10
        assert pipeline._uploader._confirmation is container.get_confirmation()

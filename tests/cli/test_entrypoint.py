"""
Tests for cli.entrypoint — argument handling, exit codes and dispatch.

The DIContainer is patched so no adapters or external tools are touched.
"""

from unittest.mock import MagicMock, patch

import pytest

from cli.entrypoint import build_parser, load_settings, main, parse_args
from domain.models import UploadResult
from shared_utils.error_handler import ConfigurationMissingError, InvalidConfigurationError


@pytest.fixture()
def env(monkeypatch, base_settings_kwargs) -> None:
    for key, value in base_settings_kwargs.items():
        monkeypatch.setenv(key.upper(), value)


@pytest.fixture()
def container_cls():
    with patch("cli.entrypoint.DIContainer") as cls:
        pipeline = cls.return_value.get_pipeline_service.return_value
        pipeline.run_upload.return_value = 0
        pipeline.run_clipboard.return_value = 0
        pipeline.run_screenshot.return_value = 0
        pipeline.last_result = None
        yield cls


# ---------------------------------------------------------------------------
# parse_args
# ---------------------------------------------------------------------------


class TestParseArgs:
    def test_defaults(self) -> None:
        args = parse_args([])
        assert args.upload is None
        assert args.clipboard is False
        assert args.volume is None
        assert args.length is None

    def test_values_converted(self) -> None:
        args = parse_args(["-u", "a.png", "-v", "0.5", "-l", "12"])
        assert args.upload == "a.png"
        assert args.volume == 0.5
        assert args.length == 12

    def test_both_modes_rejected(self) -> None:
        with pytest.raises(InvalidConfigurationError, match="Cannot use both"):
            parse_args(["-u", "a.png", "-c"])

    def test_bad_volume(self) -> None:
        with pytest.raises(InvalidConfigurationError, match="Volume"):
            parse_args(["--volume", "1.5"])

    def test_bad_length(self) -> None:
        with pytest.raises(InvalidConfigurationError):
            parse_args(["--length", "0"])

    def test_help_lists_examples(self) -> None:
        help_text = build_parser().format_help()
        assert "Examples:" in help_text
        assert "cdn-upload -u image.png" in help_text


# ---------------------------------------------------------------------------
# load_settings
# ---------------------------------------------------------------------------


class TestLoadSettings:
    def test_overrides_applied(self, env) -> None:
        settings = load_settings(parse_args(["-v", "0.2", "-l", "5"]))
        assert settings.sound_volume == 0.2
        assert settings.filename_length == 5

    def test_missing_env_lists_fields(self) -> None:
        with pytest.raises(ConfigurationMissingError) as exc_info:
            load_settings(parse_args([]))
        assert "bucket_name" in exc_info.value.message
        assert "url_base" in exc_info.value.message

    def test_configuration_logged_without_secrets(self, env, base_settings_kwargs) -> None:
        with patch("cli.entrypoint.logger") as logger:
            settings = load_settings(parse_args([]))

        args, kwargs = logger.info.call_args
        assert args == ("configuration_loaded",)
        assert kwargs["bucket"] == settings.bucket_name
        assert base_settings_kwargs["minio_secret_key"] not in kwargs.values()


# ---------------------------------------------------------------------------
# main
# ---------------------------------------------------------------------------


class TestMain:
    def test_conflicting_modes_exit_2_before_wiring(self, env, container_cls, capsys) -> None:
        assert main(["-u", "a.png", "-c"]) == 2
        container_cls.assert_not_called()
        err = capsys.readouterr().err
        assert "Error: Cannot use both --upload and --clipboard options" in err
        assert "usage:" in err

    def test_invalid_volume_exit_2(self, env, container_cls) -> None:
        assert main(["-v", "3"]) == 2
        container_cls.assert_not_called()

    def test_missing_config_exit_1(self, container_cls, capsys) -> None:
        assert main(["-c"]) == 1
        container_cls.assert_not_called()
        assert "Missing or invalid configuration" in capsys.readouterr().err

    def test_missing_tool_exit_1(self, env, container_cls, capsys) -> None:
        container_cls.return_value.verify_required_tools.side_effect = ConfigurationMissingError(
            "wl-paste not found. Please install wl-clipboard."
        )
        assert main(["-c"]) == 1
        assert "wl-paste not found" in capsys.readouterr().err
        container_cls.return_value.get_pipeline_service.assert_not_called()

    def test_upload_dispatch_prints_url(self, env, container_cls, capsys) -> None:
        pipeline = container_cls.return_value.get_pipeline_service.return_value
        pipeline.last_result = UploadResult(
            public_url="https://cdn.example.com/AbCdEfGh.png", size_bytes=2048, formatted_size="2.00 KB"
        )

        assert main(["-u", "photo.png"]) == 0

        pipeline.run_upload.assert_called_once_with("photo.png")
        err = capsys.readouterr().err
        assert "Public URL: https://cdn.example.com/AbCdEfGh.png" in err
        assert "File Size: 2.00 KB" in err

    def test_clipboard_dispatch(self, env, container_cls) -> None:
        assert main(["--clipboard"]) == 0
        container_cls.return_value.get_pipeline_service.return_value.run_clipboard.assert_called_once()

    def test_screenshot_is_default(self, env, container_cls) -> None:
        assert main([]) == 0
        container_cls.return_value.get_pipeline_service.return_value.run_screenshot.assert_called_once()

    def test_pipeline_failure_code_returned(self, env, container_cls, capsys) -> None:
        container_cls.return_value.get_pipeline_service.return_value.run_upload.return_value = 1
        assert main(["-u", "x.png"]) == 1
        assert "Public URL" not in capsys.readouterr().err

    def test_settings_passed_to_container(self, env, container_cls) -> None:
        main(["-l", "16"])
        settings = container_cls.call_args[0][0]
        assert settings.filename_length == 16

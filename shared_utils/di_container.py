"""
Dependency injection container for managing application dependencies.
Centralizes adapter creation, capability probing and service wiring.

Optional tools (exiftool, zenity) are looked up once when the container is
built; services receive ``None`` for a missing capability and branch on it
instead of probing again.
"""

from typing import Callable, Optional
import shutil

from shared_utils.config_loader import Settings
from shared_utils.constants import ExternalTools, LogScope
from shared_utils.error_handler import ConfigurationMissingError
from shared_utils.logging_utils import get_scoped_logger


logger = get_scoped_logger(LogScope.CONFIG)

REQUIRED_TOOLS = (
    (ExternalTools.WL_PASTE, "wl-clipboard"),
    (ExternalTools.WL_COPY, "wl-clipboard"),
)


class DIContainer:
    """Lazily builds adapters and services from one Settings instance."""

    def __init__(self, settings: Settings, which: Callable[[str], Optional[str]] = shutil.which) -> None:
        self.settings = settings
        self._which = which
        self._object_store = None
        self._clipboard = None
        self._metadata_stripper = None
        self._stripper_checked = False
        self._confirmation = None
        self._confirmation_checked = False
        self._notifier = None
        self._sound_player = None
        self._pipeline_service = None

    # ------------------------------------------------------------------
    # Capability checks
    # ------------------------------------------------------------------

    def verify_required_tools(self) -> None:
        """Fail fast when a mandatory external tool is missing.

        Raises:
            ConfigurationMissingError: Naming the first missing tool.
        """
        for tool, package in REQUIRED_TOOLS:
            if self._which(tool) is None:
                raise ConfigurationMissingError(
                    f"{tool} not found. Please install {package}.",
                    context={"tool": tool},
                )

    def has_tool(self, tool: str) -> bool:
        return self._which(tool) is not None

    # ------------------------------------------------------------------
    # Adapter accessors
    # ------------------------------------------------------------------

    def get_object_store(self):
        """Get or create S3ObjectStoreAdapter (lazy singleton)."""
        if self._object_store is None:
            from adapters.s3_object_store import S3ObjectStoreAdapter

            s = self.settings
            self._object_store = S3ObjectStoreAdapter(
                bucket=s.bucket_name,
                endpoint_url=s.minio_endpoint,
                access_key=s.minio_access_key,
                secret_key=s.minio_secret_key,
                region=s.minio_region,
                timeout=s.request_timeout,
            )
            logger.debug("initialized_object_store", bucket=s.bucket_name)
        return self._object_store

    def get_clipboard(self):
        """Get or create WaylandClipboardAdapter (lazy singleton)."""
        if self._clipboard is None:
            from adapters.wayland_clipboard import WaylandClipboardAdapter

            self._clipboard = WaylandClipboardAdapter(timeout=self.settings.request_timeout)
        return self._clipboard

    def get_metadata_stripper(self):
        """ExifToolMetadataStripper, or None when exiftool is not installed."""
        if not self._stripper_checked:
            self._stripper_checked = True
            if self.has_tool(ExternalTools.EXIFTOOL):
                from adapters.exiftool_stripper import ExifToolMetadataStripper

                self._metadata_stripper = ExifToolMetadataStripper(timeout=self.settings.request_timeout)
            else:
                logger.warning("exiftool_missing", detail="EXIF data will not be removed")
        return self._metadata_stripper

    def get_confirmation(self):
        """ZenityConfirmation, or None when zenity is not installed."""
        if not self._confirmation_checked:
            self._confirmation_checked = True
            if self.has_tool(ExternalTools.ZENITY):
                from adapters.desktop import ZenityConfirmation

                self._confirmation = ZenityConfirmation()
            else:
                logger.debug("zenity_missing", detail="large uploads will not ask for confirmation")
        return self._confirmation

    def get_notifier(self):
        """Get or create NotifySendNotifier (lazy singleton)."""
        if self._notifier is None:
            from adapters.desktop import NotifySendNotifier

            self._notifier = NotifySendNotifier(timeout=self.settings.request_timeout)
        return self._notifier

    def get_sound_player(self):
        """Get or create PipeWireSoundPlayer (lazy singleton)."""
        if self._sound_player is None:
            from adapters.desktop import PipeWireSoundPlayer

            self._sound_player = PipeWireSoundPlayer(
                cache_dir=self.settings.sound_cache_dir,
                volume=self.settings.sound_volume,
                timeout=self.settings.request_timeout,
            )
        return self._sound_player

    # ------------------------------------------------------------------
    # Service accessors
    # ------------------------------------------------------------------

    def get_pipeline_service(self):
        """Get or create the fully wired PipelineService (lazy singleton)."""
        if self._pipeline_service is None:
            from adapters.desktop import SpectacleScreenshotTool
            from adapters.file_history_log import FileHistoryLogAdapter
            from services.clipboard_service import ClipboardService
            from services.content_fetcher import ContentFetcher
            from services.failure_handler import FailureHandler
            from services.pipeline_service import PipelineService
            from services.source_resolver import SourceResolver
            from services.upload_service import UploadService

            s = self.settings
            stripper = self.get_metadata_stripper()
            fetcher = ContentFetcher(
                filename_length=s.filename_length,
                metadata_stripper=stripper,
                timeout=s.request_timeout,
            )
            uploader = UploadService(
                object_store=self.get_object_store(),
                clipboard=self.get_clipboard(),
                notifier=self.get_notifier(),
                history=FileHistoryLogAdapter(s.history_log_path),
                url_base=s.url_base,
                filename_length=s.filename_length,
                confirmation=self.get_confirmation(),
            )
            self._pipeline_service = PipelineService(
                resolver=SourceResolver(fetcher=fetcher, metadata_stripper=stripper),
                uploader=uploader,
                clipboard_service=ClipboardService(
                    clipboard=self.get_clipboard(),
                    filename_length=s.filename_length,
                    metadata_stripper=stripper,
                ),
                failure_handler=FailureHandler(
                    sound_player=self.get_sound_player(),
                    clipboard=self.get_clipboard(),
                    notifier=self.get_notifier(),
                ),
                sound_player=self.get_sound_player(),
                screenshot_tool=SpectacleScreenshotTool(),
                filename_length=s.filename_length,
            )
            logger.debug("initialized_pipeline_service")
        return self._pipeline_service

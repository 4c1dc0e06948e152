"""Base exporter framework with Protocol, Registry, and Manager."""

from __future__ import annotations

import logging
from abc import abstractmethod
from pathlib import Path
from typing import TYPE_CHECKING, Any, ClassVar, Protocol, runtime_checkable

from cabinet_mfg.domain.services.gate import ExportPermission, can_export
from cabinet_mfg.domain.value_objects import ExportFormat

if TYPE_CHECKING:
    from cabinet_mfg.domain.entities import Cabinet


logger = logging.getLogger(__name__)


class ExportBlockedError(Exception):
    """Raised when the gate does not permit an export.

    Attributes:
        permission: The refused permission, with its blocking messages.
    """

    def __init__(self, permission: ExportPermission) -> None:
        self.permission = permission
        reasons = "; ".join(permission.blocking_messages)
        super().__init__(f"Export of '{permission.format.value}' blocked: {reasons}")


@runtime_checkable
class Exporter(Protocol):
    """Protocol for all exporters.

    Exporters convert a computed Cabinet to a specific format. Each exporter
    must define its format name and file extension, and implement at least
    the export method.

    Attributes:
        format_name: Export format name, matching an ExportFormat value.
        file_extension: File extension without leading dot (e.g., "dxf", "json").
    """

    format_name: ClassVar[str]
    file_extension: ClassVar[str]

    @abstractmethod
    def export(self, cabinet: Cabinet, path: Path) -> Path | None:
        """Export a cabinet to a file.

        Args:
            cabinet: The computed cabinet to export.
            path: Path where the file will be saved.

        Returns:
            Where the output was written when that is not ``path`` (for
            exporters that write several files), otherwise None.
        """
        ...

    def export_string(self, cabinet: Cabinet) -> str:
        """Export a cabinet as a string.

        Args:
            cabinet: The computed cabinet to export.

        Returns:
            String representation of the exported data.

        Raises:
            NotImplementedError: If the format does not support string export.
        """
        raise NotImplementedError(
            f"Format '{self.format_name}' does not support string export"
        )


class ExporterRegistry:
    """Registry for exporter classes.

    Exporters register themselves using the @ExporterRegistry.register
    decorator, keyed by their export format name.

    Example:
        @ExporterRegistry.register("manifest")
        class ManifestExporter:
            format_name = "manifest"
            file_extension = "json"
            ...
    """

    _exporters: ClassVar[dict[str, type[Exporter]]] = {}

    @classmethod
    def register(cls, format_name: str) -> Any:
        """Decorator to register an exporter class.

        Args:
            format_name: The format name to register (e.g., "dxf", "cutlist").

        Returns:
            Decorator function that registers the class.
        """

        def decorator(exporter_class: type[Exporter]) -> type[Exporter]:
            if format_name in cls._exporters:
                logger.warning(
                    f"Overwriting existing exporter for format '{format_name}'"
                )
            cls._exporters[format_name] = exporter_class
            logger.debug(f"Registered exporter '{format_name}': {exporter_class.__name__}")
            return exporter_class

        return decorator

    @classmethod
    def get(cls, format_name: str) -> type[Exporter]:
        """Get an exporter class by format name.

        Raises:
            KeyError: If no exporter is registered for the format.
        """
        if format_name not in cls._exporters:
            available = ", ".join(sorted(cls._exporters.keys()))
            raise KeyError(
                f"No exporter registered for format '{format_name}'. "
                f"Available formats: {available or 'none'}"
            )
        return cls._exporters[format_name]

    @classmethod
    def available_formats(cls) -> list[str]:
        """Sorted list of registered format names."""
        return sorted(cls._exporters.keys())

    @classmethod
    def is_registered(cls, format_name: str) -> bool:
        return format_name in cls._exporters

    @classmethod
    def clear(cls) -> None:
        """Clear all registered exporters.

        This is primarily useful for testing.
        """
        cls._exporters.clear()


class ExportManager:
    """Manages gate-checked export operations to multiple formats.

    Every requested format is checked against the cabinet's gate state and
    validation results before anything is written, so a blocked request
    never leaves a partial set of files behind.

    Attributes:
        output_dir: Directory where exported files will be saved.
        exporter_options: Constructor keyword arguments per format name.
    """

    def __init__(
        self,
        output_dir: Path,
        exporter_options: dict[str, dict[str, Any]] | None = None,
    ) -> None:
        """Initialize the export manager.

        Args:
            output_dir: Directory where exported files will be saved.
                        Will be created if it doesn't exist.
            exporter_options: Optional constructor arguments per format,
                        e.g. ``{"dxf": {"mode": "per_panel"}}``.
        """
        self.output_dir = Path(output_dir)
        self.exporter_options = exporter_options or {}

    @staticmethod
    def permission(format_name: str, cabinet: Cabinet) -> ExportPermission:
        """Gate permission for one format.

        Raises:
            KeyError: If the format is not registered.
            ValueError: If the format is registered but not gate-controlled.
        """
        ExporterRegistry.get(format_name)
        return can_export(ExportFormat(format_name), cabinet.state, cabinet.validation)

    def export_all(
        self,
        formats: list[str],
        cabinet: Cabinet,
        project_name: str = "cabinet",
        skip_blocked: bool = False,
    ) -> dict[str, Path]:
        """Export a cabinet to multiple formats.

        Args:
            formats: List of format names to export (e.g., ["cutlist", "dxf"]).
            cabinet: The computed cabinet to export.
            project_name: Base name for output files (default "cabinet").
            skip_blocked: Log and skip blocked formats instead of raising.

        Returns:
            Dictionary mapping format names to output file paths.

        Raises:
            KeyError: If any format is not registered.
            ExportBlockedError: If the gate refuses a format and
                skip_blocked is False.
            OSError: If file operations fail.
        """
        allowed: list[str] = []
        for format_name in formats:
            permission = self.permission(format_name, cabinet)
            if permission.allowed:
                allowed.append(format_name)
            elif skip_blocked:
                logger.warning(
                    f"Skipping {format_name} export: {'; '.join(permission.blocking_messages)}"
                )
            else:
                raise ExportBlockedError(permission)

        self.output_dir.mkdir(parents=True, exist_ok=True)

        results: dict[str, Path] = {}
        for format_name in allowed:
            exporter_class = ExporterRegistry.get(format_name)
            exporter = exporter_class(**self.exporter_options.get(format_name, {}))

            # Generate filename: {project_name}_{format}.{ext}
            filename = f"{project_name}_{format_name}.{exporter.file_extension}"
            filepath = self.output_dir / filename

            logger.info(f"Exporting to {format_name}: {filepath}")
            written = exporter.export(cabinet, filepath)
            results[format_name] = written or filepath

        return results

    def export_single(
        self,
        format_name: str,
        cabinet: Cabinet,
        project_name: str = "cabinet",
    ) -> Path:
        """Export a cabinet to a single format.

        Raises:
            KeyError: If the format is not registered.
            ExportBlockedError: If the gate refuses the format.
        """
        results = self.export_all([format_name], cabinet, project_name)
        return results[format_name]

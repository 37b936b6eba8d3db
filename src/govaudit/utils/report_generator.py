"""Report rendering for govaudit."""
import json
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Optional, Type, TypeVar, Union

from jinja2 import Environment, FileSystemLoader

from ..analyzers.types import Report
from .file_utils import write_text
from .logger import get_logger

T = TypeVar('T', bound='BaseReportExporter')

TEMPLATES_DIR = Path(__file__).parent / 'templates'


class BaseReportExporter(ABC):
    """Base class for all report exporters."""

    suffix = ''

    def __init__(self) -> None:
        self.logger = get_logger(f"exporter.{self.__class__.__name__}")

    @abstractmethod
    def render(self, report: Report) -> str:
        """Render the report to text."""

    def export(
        self,
        report: Report,
        output_path: Optional[Union[str, Path]] = None
    ) -> Union[str, Path]:
        """Render the report and optionally save it.

        Args:
            report: Report to export
            output_path: Optional path to save the report

        Returns:
            The rendered text if output_path is None, otherwise the written path
        """
        content = self.render(report)
        if output_path is None:
            return content
        path = Path(output_path)
        if not path.suffix:
            path = path.with_suffix(self.suffix)
        written = write_text(content, path)
        self.logger.info("Report written to %s", written)
        return written

    @classmethod
    def create(cls: Type[T], format: str) -> 'BaseReportExporter':
        """Create an exporter instance for the specified format.

        Raises:
            ValueError: If the format is not supported
        """
        if format == 'json':
            return JSONExporter()
        elif format == 'markdown':
            return MarkdownExporter()
        else:
            raise ValueError(f"Unsupported export format: {format}")


class JSONExporter(BaseReportExporter):
    """Exports reports as indented JSON."""

    suffix = '.json'

    def render(self, report: Report) -> str:
        return json.dumps(report.to_dict(), indent=2, ensure_ascii=False)


class MarkdownExporter(BaseReportExporter):
    """Exports reports in Markdown format."""

    suffix = '.md'

    def __init__(self) -> None:
        """Initialize the Markdown exporter with Jinja2 environment."""
        super().__init__()
        self.env = Environment(
            loader=FileSystemLoader(TEMPLATES_DIR),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.template = self.env.get_template('report.md.j2')

    def render(self, report: Report) -> str:
        return self.template.render(**self._transform_data(report))

    def _transform_data(self, report: Report) -> Dict[str, Any]:
        return {
            'avg_risk': report.avg_risk,
            'max_risk': report.max_risk,
            'flagged': len(report.flagged()),
            'items': [item.to_dict() for item in report.items],
        }


def generate_report(
    report: Report,
    output_path: Optional[Union[str, Path]] = None,
    format: str = 'json'
) -> Union[str, Path]:
    """Generate a report in the specified format.

    Args:
        report: Report to include
        output_path: Path to save the report (optional)
        format: Output format ('json' or 'markdown')

    Returns:
        The rendered report, or the path it was written to
    """
    exporter = BaseReportExporter.create(format)
    return exporter.export(report, output_path)

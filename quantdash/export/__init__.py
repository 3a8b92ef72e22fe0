"""Report export"""

from .report import build_report, report_file_name, serialize_report, write_report

__all__ = ["build_report", "report_file_name", "serialize_report", "write_report"]

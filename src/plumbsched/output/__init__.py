"""Output generation for schedules (CSV, PDF, text)."""

from plumbsched.output.csv_exporter import csv_filename, export_week_csv, write_week_csv
from plumbsched.output.pdf_generator import PDFGenerator
from plumbsched.output.text_generator import TextReportGenerator

__all__ = [
    "PDFGenerator",
    "TextReportGenerator",
    "csv_filename",
    "export_week_csv",
    "write_week_csv",
]

from .base_exporter import BaseExporter, ExportResult
from .mu_exporter import ExportJob, MuExporter, export, export_many

__all__ = ['BaseExporter', 'ExportResult', 'ExportJob', 'MuExporter', 'export', 'export_many']

"""Load and validate exporter configuration YAML.

This subpackage parses an ``export.yaml`` file holding the default export
options, the output directory, document metadata values and the print delay,
and produces an :class:`ExportConfig` the exporter and CLI consume. The entry
point is :func:`load_export_config`; code that needs no file can use
``ExportConfig()`` directly.

Examples
--------
>>> from proposal_export.config import ExportConfig
>>> ExportConfig().options.format
'docx'
"""

from .loader import load_export_config
from .models import ExportConfig, ExportConfigError

__all__ = ["ExportConfig", "ExportConfigError", "load_export_config"]

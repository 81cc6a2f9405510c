"""
Output generation modules.
"""

from .json_export import R1csJson, WtnsJson, export_document, dump_json, load_witness_values

__all__ = ['R1csJson', 'WtnsJson', 'export_document', 'dump_json', 'load_witness_values']

"""Generation reports"""
from .json_formatter import GenerationJSONFormatter

__all__ = ['GenerationJSONFormatter']

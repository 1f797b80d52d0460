"""Persisting generated contracts and parsed records"""
from .writer import read_record, write_record, write_rendered

__all__ = ['write_rendered', 'write_record', 'read_record']

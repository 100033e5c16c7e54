"""Bulk loaders for the Skills Matrix"""
from .excel_importer import SkillsMatrixImporter

__all__ = ['SkillsMatrixImporter']

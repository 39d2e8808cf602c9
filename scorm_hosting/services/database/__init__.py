"""
Database Services Package für die SCORM Hosting Plattform

Author: DSP Development Team
Version: 1.0.0
"""

from .database_service import ProjectPersistenceService

__all__ = ["ProjectPersistenceService"]

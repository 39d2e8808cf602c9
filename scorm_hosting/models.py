"""
SCORM Hosting Models Registry

Imports the models of the logical submodules so Django's ORM registers them
under the ``scorm_hosting`` app label.
"""

from .projects.models import *  # noqa: F401,F403

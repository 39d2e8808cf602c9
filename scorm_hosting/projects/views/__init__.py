"""
SCORM Hosting Project Views Package

- Projekt-Liste, -Erstellung, -Detail und -Löschung
- Upload von SCORM-Paketen

Author: DSP Development Team
Version: 1.0.0
"""

from .project_views import *
from .upload_views import *

"""
APK Generator (apkgen): builds Android WebView packages from a fixed template project.
"""

from apkgen.config import Settings, get_settings

__version__ = "0.1.0"

__all__ = [
    "Settings",
    "get_settings",
]

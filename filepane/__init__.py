"""
filepane - file browser pane for a terminal text editor
"""

__version__ = "0.3.0"

"""moar: workspace package status for sibling git repositories.

Usage:
    moar status
    moar branch --test-merge
    moar each 'git pull' | sh
"""

__version__ = "1.0.0"

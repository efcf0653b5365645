"""
Shared Config Module
====================

Packaged configuration files.

Structure:
- settings/defaults.yaml: system defaults, lowest precedence
"""

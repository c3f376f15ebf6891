"""
Dynamic Ansible inventory built from zone transfer records and CIDR group rules.
"""

__version__ = "0.1.0"

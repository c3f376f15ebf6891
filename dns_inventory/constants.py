"""
Application-wide constants for the DNS inventory tools.

This module defines the constant values shared between the importer, the
CIDR group assignment and the inventory view builder. It provides a single
source of truth for:
- Default database location
- Zone record types understood by the importer
- Keys emitted in host variable maps
- Pseudo-group names of the inventory document

Usage:
    from dns_inventory.constants import ANSIBLE_HOST_KEY, RECORD_TYPE_A
"""

#------------------------------------------------------------------------------
# Storage
#------------------------------------------------------------------------------

DEFAULT_DB_PATH = "inventory.db"

#------------------------------------------------------------------------------
# Zone Records
#------------------------------------------------------------------------------

RECORD_TYPE_A = 'A'
RECORD_TYPE_AAAA = 'AAAA'
RECORD_TYPE_CNAME = 'CNAME'

# owner ttl class type value
MIN_RECORD_FIELDS = 5

# ACME challenge records are never hosts
DEFAULT_SKIP_MARKER = "_acme"

#------------------------------------------------------------------------------
# Host Variables
#------------------------------------------------------------------------------

ANSIBLE_HOST_KEY = 'ansible_host'
IPV4_KEY = 'ipv4'
IPV6_KEY = 'ipv6'
CNAMES_KEY = 'cnames'

#------------------------------------------------------------------------------
# Inventory Document
#------------------------------------------------------------------------------

META_GROUP = '_meta'
ALL_GROUP = 'all'
UNGROUPED_GROUP = 'ungrouped'

# Group names a database group may not take over
RESERVED_GROUP_NAMES = frozenset([META_GROUP, ALL_GROUP, UNGROUPED_GROUP])

DEFAULT_JSON_INDENT = 2

#------------------------------------------------------------------------------
# CIDR Rules
#------------------------------------------------------------------------------

RULE_COMMENT_PREFIX = '#'

LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']

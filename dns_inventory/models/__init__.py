from .base import Base
from .host import Host, CName, HostVar
from .group import Group, GroupVar, host_groups

from .BaseService import BaseService
from .HostService import HostService, merge_host_vars
from .GroupService import GroupService, GroupState
from .InventoryService import InventoryService, compute_ungrouped
from .ImportService import ImportService, ImportSummary
from .CidrAssignmentService import CidrAssignmentService, AssignmentSummary

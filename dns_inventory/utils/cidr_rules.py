import ipaddress
import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Set, Tuple

from dns_inventory.constants import RULE_COMMENT_PREFIX
from dns_inventory.exceptions import RuleParseError

logger = logging.getLogger(__name__)

@dataclass(frozen=True)
class CidrRule:
    """
    Maps an IPv4 network to a group name.
    """
    network: ipaddress.IPv4Network
    group: str

    def matches(self, address: ipaddress.IPv4Address) -> bool:
        return address in self.network

def parse_rule_line(raw: str, line_number: int) -> CidrRule:
    """
    Parse one ``CIDR<whitespace>Group Name`` line.

    The group name is the rest of the line with surrounding whitespace
    removed; inner spaces are kept. Host bits in the CIDR are accepted and
    masked off.
    Raises:
        RuleParseError: missing group, malformed CIDR or non-IPv4 CIDR
    """
    parts = raw.strip().split(None, 1)
    if len(parts) < 2 or not parts[1].strip():
        raise RuleParseError("expected format 'CIDR<space>Group Name'", line_number=line_number)
    cidr, group = parts[0], parts[1].strip()

    if '/' not in cidr:
        raise RuleParseError(f"invalid CIDR {cidr!r}: missing prefix length", line_number=line_number)
    try:
        network = ipaddress.ip_network(cidr, strict=False)
    except ValueError as e:
        raise RuleParseError(f"invalid CIDR {cidr!r}: {e}", line_number=line_number) from e
    if network.version != 4:
        raise RuleParseError(f"only IPv4 CIDRs are allowed ({cidr!r})", line_number=line_number)

    return CidrRule(network=network, group=group)

def parse_rules(lines: Iterable[str]) -> List[CidrRule]:
    """
    Parse a rule source; blank lines and ``#`` comments are skipped.

    Any bad line rejects the whole source.
    Raises:
        RuleParseError: a malformed line, or no rule at all
    """
    rules = []
    for line_number, line in enumerate(lines, start=1):
        raw = line.strip()
        if not raw or raw.startswith(RULE_COMMENT_PREFIX):
            continue
        rules.append(parse_rule_line(raw, line_number))
    if not rules:
        raise RuleParseError("no rules found")
    return rules

def load_rules(path) -> List[CidrRule]:
    """
    Read and parse a rule file.
    Raises:
        RuleParseError: the file cannot be read or holds an invalid rule
    """
    try:
        with open(path, 'r', encoding='utf-8') as f:
            rules = parse_rules(f)
    except (OSError, UnicodeDecodeError) as e:
        raise RuleParseError(f"cannot read rule file {path}: {str(e)}") from e
    logger.info(f"Loaded {len(rules)} rules from {path}")
    return rules

def compute_memberships(hosts: Iterable[Tuple[str, str]], rules: List[CidrRule]) -> Dict[str, Set[str]]:
    """
    Match every host against every rule.

    Rules are cumulative: a host inside several (possibly overlapping)
    networks joins every matching group. Hosts whose address is empty or
    not a valid IPv4 address are skipped.
    Args:
        hosts: (name, ipv4) pairs
        rules: parsed rules
    Returns:
        dict: host name -> set of group names, only for hosts with a match
    """
    memberships: Dict[str, Set[str]] = {}
    for name, ipv4 in hosts:
        if not ipv4:
            continue
        try:
            address = ipaddress.IPv4Address(ipv4.strip())
        except ValueError:
            logger.warning(f"Skipping host {name}: invalid IPv4 address {ipv4!r}")
            continue
        for rule in rules:
            if rule.matches(address):
                memberships.setdefault(name, set()).add(rule.group)
    return memberships

"""Predicates deciding whether an address or a host name is internal"""

import ipaddress
from typing import Union

IPv4Like = Union[str, ipaddress.IPv4Address]
IPv6Like = Union[str, ipaddress.IPv6Address]
IPLike = Union[str, ipaddress.IPv4Address, ipaddress.IPv6Address]

_IPV4_PRIVATE_NETWORKS = tuple(ipaddress.IPv4Network(net) for net in (
    "0.0.0.0/8",        # "this" network, includes the unspecified address
    "10.0.0.0/8",
    "127.0.0.0/8",      # loopback
    "169.254.0.0/16",   # link-local, includes cloud metadata 169.254.169.254
    "172.16.0.0/12",
    "192.168.0.0/16",
    "192.0.2.0/24",     # documentation (TEST-NET-1..3)
    "198.51.100.0/24",
    "203.0.113.0/24",
    "224.0.0.0/3",      # multicast, reserved and broadcast (first octet >= 224)
))

_IPV6_UNIQUE_LOCAL = ipaddress.IPv6Network("fc00::/7")
_IPV6_LINK_LOCAL = ipaddress.IPv6Network("fe80::/10")
_IPV6_MULTICAST = ipaddress.IPv6Network("ff00::/8")

_INTERNAL_HOSTS = ("localhost", "metadata.google.internal")
_INTERNAL_SUFFIXES = (".local", ".internal")


def is_private_ipv4(address: IPv4Like) -> bool:
    """Check if an IPv4 address is loopback, private, link-local, documentation or reserved"""
    ip = ipaddress.IPv4Address(address)
    return any(ip in network for network in _IPV4_PRIVATE_NETWORKS)


def is_private_ipv6(address: IPv6Like) -> bool:
    """Check if an IPv6 address is internal, looking through IPv4-mapped addresses"""
    ip = ipaddress.IPv6Address(address)
    if ip.is_loopback or ip.is_unspecified:
        return True
    if ip in _IPV6_MULTICAST or ip in _IPV6_UNIQUE_LOCAL or ip in _IPV6_LINK_LOCAL:
        return True
    mapped = ip.ipv4_mapped
    return mapped is not None and is_private_ipv4(mapped)


def is_private_ip(address: IPLike) -> bool:
    """
    Check if an IPv4 or IPv6 address must not be requested.

    Raises:
        ValueError: If ``address`` is not an IP address
    """
    ip = ipaddress.ip_address(address)
    if isinstance(ip, ipaddress.IPv4Address):
        return is_private_ipv4(ip)
    return is_private_ipv6(ip)


def is_internal_host(host: str) -> bool:
    """Check a host name against well-known internal names"""
    host = host.lower()
    return host in _INTERNAL_HOSTS or host.endswith(_INTERNAL_SUFFIXES)

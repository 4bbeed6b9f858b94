"""
Registered number view: SIP configs and agent configs joined by phone number
"""

from typing import Any, Dict, List, Sequence

from testbench.models.configs import NumberEntry


def extract_records(data: Any, keys: Sequence[str] = ("configs", "items")) -> List[Dict[str, Any]]:
    """
    Pull the record list out of a Control API list response

    The backend answers either with a bare list or with the list under one
    of `keys`.
    """
    if isinstance(data, list):
        records = data
    elif isinstance(data, dict):
        records = next((data[k] for k in keys if isinstance(data.get(k), list)), [])
    else:
        records = []
    return [r for r in records if isinstance(r, dict)]


def merge_numbers(
    sip_configs: List[Dict[str, Any]],
    agent_configs: List[Dict[str, Any]]
) -> List[NumberEntry]:
    """
    Join SIP and agent configs on phone_number

    Every SIP config yields an entry; agent configs attach to the matching
    entry or add their own. Records without a phone number are skipped.
    """
    by_number: Dict[str, NumberEntry] = {}

    for sip in sip_configs:
        phone = sip.get("phone_number")
        if not phone:
            continue
        by_number[phone] = NumberEntry(phone_number=phone, sip_config=sip)

    for agent in agent_configs:
        phone = agent.get("phone_number")
        if not phone:
            continue
        entry = by_number.get(phone)
        if entry is None:
            by_number[phone] = NumberEntry(phone_number=phone, agent_config=agent)
        else:
            entry.agent_config = agent

    return sorted(by_number.values(), key=lambda e: e.phone_number)

"""
Agent catalog ("teammates").

Each store entry looks like:
    {"key": "adam", "name": "Adam", "description": "...", "hired": true}
"""

from .client import ApiClient

ACTIONS = ("add", "remove")


def fetch_agent_store(client: ApiClient) -> list:
    """Return the list of available agents."""
    data = client.get("/agents/store") or {}
    return data.get("available_agents") or []


def manage_agent(client: ApiClient, agent_key: str, action: str) -> dict:
    """
    Hire or release an agent.

    Returns:
        {"success": bool, "message": str}
    """
    if action not in ACTIONS:
        raise ValueError(f"Unknown agent action: {action}")
    return client.post("/agents/manage", body={"agent_key": agent_key, "action": action}) or {}

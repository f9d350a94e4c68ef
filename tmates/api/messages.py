"""
Chat threads and messages.

Thread summaries carry id, title, kind, agent_keys, last_message_preview,
last_activity and unread_count. A full thread adds "messages", each with
id, role, content, author, created_at and attachments.
"""

from .client import ApiClient, quote_segment


def fetch_chat_threads(client: ApiClient) -> list:
    return client.get("/chats") or []


def fetch_chat_thread(client: ApiClient, thread_id: str) -> dict:
    return client.get(f"/chats/{quote_segment(thread_id)}")


def create_chat_thread(client: ApiClient, agent_key: str) -> dict:
    return client.post("/chats", query={"agent_key": agent_key})


def send_chat_message(client: ApiClient, thread_id: str, content: str) -> dict:
    return client.post(f"/chats/{quote_segment(thread_id)}/messages", body={"content": content})


def delete_chat_thread(client: ApiClient, thread_id: str):
    client.delete(f"/chats/{quote_segment(thread_id)}")


def clear_chat_history(client: ApiClient, thread_id: str):
    client.post(f"/chats/{quote_segment(thread_id)}/clear")

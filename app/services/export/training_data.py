"""
Batch export of stored chat sessions into a training-data document.

Runs outside the request-serving process: reads every session with a
synchronous pymongo client, flattens each into role/content pairs plus
metadata and writes one pretty-printed JSON array, overwriting earlier output.
"""

import json
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union

from pymongo import DESCENDING, MongoClient

from app.config import get_settings
from app.config.database import MongoDBConfig, get_mongodb_config
from app.constants import EXPORT_JSON_INDENT, ROLE_ASSISTANT, ROLE_USER
from app.utils.helpers import to_iso_timestamp
from app.utils.logger import get_logger, setup_logging

logger = get_logger(__name__)


def to_training_record(session: Dict[str, Any]) -> Dict[str, Any]:
    """
    Flatten one stored chat session.

    Senders other than ``user`` become ``assistant``; message order is kept.
    ``rating`` and ``isAccurate`` are omitted when the session has no such answer.
    """
    conversation = [
        {
            "role": ROLE_USER if message.get("sender") == ROLE_USER else ROLE_ASSISTANT,
            "content": message.get("text"),
        }
        for message in session.get("messages") or []
    ]

    feedback = session.get("feedback") or {}
    metadata: Dict[str, Any] = {}
    if feedback.get("rating") is not None:
        metadata["rating"] = feedback["rating"]
    if feedback.get("isAccurate") is not None:
        metadata["isAccurate"] = feedback["isAccurate"]
    metadata["timestamp"] = to_iso_timestamp(session.get("createdAt"))

    return {"messages": conversation, "metadata": metadata}


def build_training_data(sessions: Iterable[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Transform every session, preserving input order."""
    return [to_training_record(session) for session in sessions]


def write_training_data(records: List[Dict[str, Any]], output_path: Union[str, Path]) -> Path:
    """Serialize records as pretty-printed JSON, replacing any previous file."""
    path = Path(output_path)
    payload = json.dumps(records, indent=EXPORT_JSON_INDENT, ensure_ascii=False)
    path.write_text(payload, encoding="utf-8")
    return path


def fetch_chat_sessions(client: MongoClient, config: MongoDBConfig) -> List[Dict[str, Any]]:
    """Read every chat session, newest first."""
    collection = client[config.DATABASE][config.COLLECTION_CHAT_SESSIONS]
    return list(collection.find({}).sort("createdAt", DESCENDING))


def export_training_data(
    output_path: Union[str, Path],
    config: Optional[MongoDBConfig] = None,
    client: Optional[MongoClient] = None,
) -> int:
    """
    Run the export end to end.

    Any error propagates to the caller. The database connection is always
    released, including when a client was passed in.

    Returns:
        Number of sessions exported
    """
    config = config or get_mongodb_config()
    client = client or MongoClient(**config.connection_kwargs)

    try:
        client.admin.command("ping")
        logger.info(f"🔌 Connected to MongoDB at {config.safe_description}")

        sessions = fetch_chat_sessions(client, config)
        logger.info(f"Found {len(sessions)} chat sessions.")

        records = build_training_data(sessions)
        path = write_training_data(records, output_path)
        logger.info(f"✅ Data exported to {path}")
        return len(records)
    finally:
        client.close()


def main() -> int:
    """Command-line entry point: export, report, and exit."""
    settings = get_settings()
    setup_logging(settings)

    try:
        count = export_training_data(settings.TRAINING_DATA_EXPORT_PATH)
    except Exception as e:
        logger.error(f"Export failed: {e}", exc_info=True)
        return 1

    logger.info(f"Exported {count} sessions. You can now use this file to retrain your model!")
    return 0

"""Training-data export tests."""

import json
from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock

import pytest
from pymongo.errors import ServerSelectionTimeoutError

from app.config.database import MongoDBConfig
from app.services.export import training_data
from app.services.export.training_data import (
    build_training_data,
    export_training_data,
    to_training_record,
    write_training_data,
)
from tests.fakes import FakeCollection


def _session(created_at, feedback=None, messages=None):
    session = {
        "messages": messages if messages is not None else [
            {"sender": "user", "text": "Hi"},
            {"sender": "bot", "text": "Hello! How can I help?"},
        ],
        "createdAt": created_at,
    }
    if feedback is not None:
        session["feedback"] = feedback
    return session


def _client_for(collection):
    client = MagicMock()
    client.__getitem__.return_value.__getitem__.return_value = collection
    return client


class TestTransform:

    def test_roles_and_metadata(self):
        created = datetime(2024, 6, 1, 12, 30, 0, 250000, tzinfo=timezone.utc)

        record = to_training_record(_session(created, {"rating": 5, "isAccurate": "yes", "isFast": "no"}))

        assert record == {
            "messages": [
                {"role": "user", "content": "Hi"},
                {"role": "assistant", "content": "Hello! How can I help?"},
            ],
            "metadata": {"rating": 5, "isAccurate": "yes", "timestamp": "2024-06-01T12:30:00.250Z"},
        }

    def test_any_non_user_sender_is_assistant(self):
        record = to_training_record(
            _session(datetime(2024, 1, 1), messages=[{"sender": "system", "text": "boot"}])
        )

        assert record["messages"] == [{"role": "assistant", "content": "boot"}]

    def test_missing_feedback_omits_keys(self):
        record = to_training_record(_session(datetime(2024, 1, 1, tzinfo=timezone.utc)))

        assert record["metadata"] == {"timestamp": "2024-01-01T00:00:00.000Z"}

    def test_partial_feedback(self):
        record = to_training_record(_session(datetime(2024, 1, 1), {"isAccurate": "no"}))

        assert record["metadata"]["isAccurate"] == "no"
        assert "rating" not in record["metadata"]

    def test_empty_conversation(self):
        record = to_training_record(_session(datetime(2024, 1, 1), messages=[]))

        assert record["messages"] == []

    def test_order_preserved(self):
        base = datetime(2024, 1, 1, tzinfo=timezone.utc)
        sessions = [_session(base + timedelta(days=2)), _session(base + timedelta(days=1))]

        records = build_training_data(sessions)

        assert [record["metadata"]["timestamp"][:10] for record in records] == ["2024-01-03", "2024-01-02"]


class TestWrite:

    def test_pretty_printed_and_overwritten(self, tmp_path):
        path = tmp_path / "training_data.json"
        path.write_text("stale", encoding="utf-8")

        write_training_data([{"messages": [], "metadata": {"timestamp": None}}], path)

        text = path.read_text(encoding="utf-8")
        assert text.startswith('[\n  {\n    "messages"')
        assert json.loads(text) == [{"messages": [], "metadata": {"timestamp": None}}]

    def test_empty_export_is_empty_array(self, tmp_path):
        path = write_training_data([], tmp_path / "out.json")

        assert json.loads(path.read_text(encoding="utf-8")) == []

    def test_unicode_kept(self, tmp_path):
        path = write_training_data([{"messages": [{"role": "user", "content": "Grüß dich"}]}], tmp_path / "out.json")

        assert "Grüß dich" in path.read_text(encoding="utf-8")


class TestExport:

    def test_exports_newest_first(self, tmp_path):
        collection = FakeCollection()
        base = datetime(2024, 1, 1, tzinfo=timezone.utc)
        collection.documents.extend([
            _session(base, {"rating": 2}),
            _session(base + timedelta(hours=1), {"rating": 4}),
        ])
        client = _client_for(collection)
        output = tmp_path / "training_data.json"

        count = export_training_data(output, config=MongoDBConfig(), client=client)

        assert count == 2
        exported = json.loads(output.read_text(encoding="utf-8"))
        assert [record["metadata"]["rating"] for record in exported] == [4, 2]
        client.admin.command.assert_called_once_with("ping")
        client.close.assert_called_once()

    def test_connection_failure_propagates_and_closes(self, tmp_path):
        client = MagicMock()
        client.admin.command.side_effect = ServerSelectionTimeoutError("no servers")
        output = tmp_path / "training_data.json"

        with pytest.raises(ServerSelectionTimeoutError):
            export_training_data(output, config=MongoDBConfig(), client=client)

        assert not output.exists()
        client.close.assert_called_once()

    def test_main_exit_codes(self, monkeypatch):
        monkeypatch.setattr(training_data, "export_training_data", lambda path: 3)
        assert training_data.main() == 0

        def fail(path):
            raise ServerSelectionTimeoutError("no servers")

        monkeypatch.setattr(training_data, "export_training_data", fail)
        assert training_data.main() == 1


@pytest.mark.asyncio
async def test_saved_session_is_exported(recorder, chat_collection, tmp_path):
    await recorder.save_session([{"sender": "user", "text": "hi"}])
    output = tmp_path / "training_data.json"

    export_training_data(output, config=MongoDBConfig(), client=_client_for(chat_collection))

    exported = json.loads(output.read_text(encoding="utf-8"))
    assert len(exported) == 1
    assert exported[0]["messages"] == [{"role": "user", "content": "hi"}]
    assert exported[0]["metadata"]["timestamp"].endswith("Z")

"""Shared test fixtures for claude-log-viewer."""

import json

import pytest

from claude_log_viewer.loader import load_records


@pytest.fixture
def raw_session():
    """A realistic session log as decoded JSON.

    Includes:
    - system init and result records
    - user prompt with text
    - assistant text + tool_use, and thinking + tool_use
    - successful tool result (multi-line)
    - failed tool result flagged with is_error
    - failed tool result detected only by its "Error:" prefix
    - an unrecognized entry type and a non-object entry
    """
    return [
        # 0. System init
        {
            "type": "system",
            "subtype": "init",
            "cwd": "/Users/testuser/dev/myapp",
            "model": "claude-sonnet",
            "permissionMode": "default",
            "tools": ["Read", "Edit", "Bash"],
            "mcp_servers": [
                {"name": "github", "status": "connected"},
                {"name": "jira", "status": "failed"},
            ],
        },
        # 1. User prompt
        {
            "type": "user",
            "message": {"role": "user", "content": [{"type": "text", "text": "Help me refactor the **auth** module"}]},
        },
        # 2. Assistant text + tool_use
        {
            "type": "assistant",
            "message": {
                "role": "assistant",
                "content": [
                    {"type": "text", "text": "Let me read the current code."},
                    {"type": "tool_use", "id": "toolu_001", "name": "Read", "input": {"file_path": "/src/auth.ts"}},
                ],
                "usage": {"input_tokens": 120, "output_tokens": 42},
            },
        },
        # 3. Successful tool result, 7 lines
        {
            "type": "user",
            "message": {"role": "user", "content": [
                {
                    "type": "tool_result",
                    "tool_use_id": "toolu_001",
                    "content": "line 1\nline 2\nline 3\nline 4\nline 5\nline 6\nline 7",
                    "is_error": False,
                },
            ]},
        },
        # 4. Assistant thinking + tool_use
        {
            "type": "assistant",
            "message": {"role": "assistant", "content": [
                {"type": "thinking", "thinking": "I should run the *tests* first."},
                {"type": "tool_use", "id": "toolu_002", "name": "Bash", "input": {"command": "npm test -- --grep Authenticate"}},
            ]},
        },
        # 5. Failed tool result flagged with is_error
        {
            "type": "user",
            "message": {"role": "user", "content": [
                {"type": "tool_result", "tool_use_id": "toolu_002", "content": "3 tests failed", "is_error": True},
            ]},
        },
        # 6. Assistant tool_use for a missing file
        {
            "type": "assistant",
            "message": {"role": "assistant", "content": [
                {"type": "tool_use", "id": "toolu_003", "name": "read_file", "input": {"path": "/src/missing.ts"}},
            ]},
        },
        # 7. Failed tool result detected by output prefix only
        {
            "type": "user",
            "message": {"role": "user", "content": [
                {"type": "tool_result", "tool_use_id": "toolu_003", "content": "Error: file not found", "is_error": False},
            ]},
        },
        # 8. Session result
        {
            "type": "result",
            "subtype": "success",
            "result": "Refactored the auth module.\nAll tests pass.",
            "duration_ms": 12345,
            "total_cost_usd": 0.123456,
            "num_turns": 4,
            "usage": {"input_tokens": 1500, "output_tokens": 320},
        },
        # 9. Unrecognized entry type
        {"type": "file-history-snapshot", "files": [{"path": "/src/auth.ts"}]},
        # 10. Not an object at all
        "garbage",
    ]


@pytest.fixture
def records(raw_session):
    return load_records(raw_session)


@pytest.fixture
def report_file(tmp_path, raw_session):
    """Write the session to a report.json file."""
    path = tmp_path / "report.json"
    path.write_text(json.dumps(raw_session), encoding="utf-8")
    return path

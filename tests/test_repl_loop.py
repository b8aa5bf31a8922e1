"""Tests for the REPL edit prompt and turn output."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from groqchat.repl import run_edit_prompt
from groqchat.repl.loop import print_turn
from test_helpers import make_engine


def _session(*responses):
    session = MagicMock()
    session.prompt_async = AsyncMock(side_effect=list(responses))
    return session


@pytest.mark.asyncio
async def test_edit_prompt_is_prefilled_and_commits(capsys):
    engine = make_engine("first answer", "second answer")
    await engine.submit_user_turn("question")
    user = engine.messages[0]
    engine.begin_edit(user.id, user.content)
    session = _session("better question")

    await run_edit_prompt(session, engine)

    assert session.prompt_async.await_args.kwargs["default"] == "question"
    assert engine.editing is None
    assert engine.messages[0].content == "better question"
    out = capsys.readouterr().out
    assert f"Saved [{user.id}]" in out
    assert "AI: second answer" in out


@pytest.mark.asyncio
async def test_empty_edit_input_cancels(capsys):
    engine = make_engine()
    await engine.submit_user_turn("question")
    engine.begin_edit(engine.messages[0].id, "question")

    await run_edit_prompt(_session("   "), engine)

    assert engine.editing is None
    assert engine.messages[0].content == "question"
    assert "Edit cancelled" in capsys.readouterr().out


@pytest.mark.asyncio
async def test_ctrl_c_cancels_edit():
    engine = make_engine()
    await engine.submit_user_turn("question")
    engine.begin_edit(engine.messages[0].id, "question")

    await run_edit_prompt(_session(KeyboardInterrupt()), engine)

    assert engine.editing is None


@pytest.mark.asyncio
async def test_failed_commit_keeps_edit_active(capsys):
    engine = make_engine()
    await engine.submit_user_turn("question")
    user = engine.messages[0]
    engine.store.fail_on.add("update_content")
    engine.begin_edit(user.id, user.content)

    await run_edit_prompt(_session("changed"), engine)

    assert engine.editing is not None
    assert engine.editing.draft == "changed"
    assert "Edit was not saved" in capsys.readouterr().out


def test_print_turn_reports_unsaved_message(capsys):
    print_turn(None)
    assert "Message was not saved" in capsys.readouterr().out

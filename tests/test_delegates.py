"""デリゲート実装を検証するテスト。"""

import asyncio
import io
import os
import threading

import pytest

from registry_signing.services.delegates import (
    AutoAcceptDelegate,
    AutoRejectDelegate,
    InteractivePromptDelegate,
)


class _BlockingInput(io.StringIO):
    """readline が解放されるまで戻らない入力ストリーム。"""

    def __init__(self) -> None:
        super().__init__()
        self.release = threading.Event()

    def readline(self, *_args) -> str:
        self.release.wait(timeout=5)
        return "y\n"


@pytest.mark.asyncio
async def test_auto_delegates(registry, package) -> None:
    kwargs = {"registry": registry, "package": package, "version": "1.0.0"}

    assert await AutoAcceptDelegate().on_unsigned(**kwargs) is True
    assert await AutoAcceptDelegate().on_untrusted(**kwargs) is True
    assert await AutoRejectDelegate().on_unsigned(**kwargs) is False
    assert await AutoRejectDelegate().on_untrusted(**kwargs) is False


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("answer", "expected"),
    [("y\n", True), ("YES\n", True), (" yes \n", True), ("n\n", False), ("\n", False), ("", False)],
)
async def test_interactive_prompt_answers(answer, expected, registry, package) -> None:
    output = io.StringIO()
    delegate = InteractivePromptDelegate(input_stream=io.StringIO(answer), output_stream=output)

    result = await delegate.on_unsigned(registry=registry, package=package, version="1.0.0")

    assert result is expected
    assert "mona.linkedlist version 1.0.0 from https://packages.example.com is not signed" in output.getvalue()
    assert output.getvalue().endswith("(y/N) ")


@pytest.mark.asyncio
async def test_interactive_prompt_untrusted_message(registry, package) -> None:
    output = io.StringIO()
    delegate = InteractivePromptDelegate(input_stream=io.StringIO("y\n"), output_stream=output)

    assert await delegate.on_untrusted(registry=registry, package=package, version="1.0.0") is True
    assert "untrusted certificate" in output.getvalue()


@pytest.mark.asyncio
async def test_interactive_prompt_timeout_means_stop(registry, package) -> None:
    """応答が無いままタイムアウトした場合は続行しない。"""
    blocking = _BlockingInput()
    delegate = InteractivePromptDelegate(
        input_stream=blocking, output_stream=io.StringIO(), timeout_seconds=0.05
    )

    try:
        result = await delegate.on_untrusted(registry=registry, package=package, version="1.0.0")
    finally:
        blocking.release.set()

    assert result is False


@pytest.mark.asyncio
async def test_answer_after_timeout_goes_to_next_prompt(registry, package) -> None:
    """タイムアウトで残った読み取りは、次の問い合わせへの応答として使われる。"""
    read_fd, write_fd = os.pipe()
    input_stream = os.fdopen(read_fd, "r")
    output = io.StringIO()
    delegate = InteractivePromptDelegate(
        input_stream=input_stream, output_stream=output, timeout_seconds=0.2
    )
    kwargs = {"registry": registry, "package": package, "version": "1.0.0"}

    try:
        first = await delegate.on_unsigned(**kwargs)
        asyncio.get_running_loop().call_later(0.05, os.write, write_fd, b"y\n")
        second = await delegate.on_untrusted(**kwargs)
    finally:
        os.close(write_fd)
        input_stream.close()

    assert first is False
    assert second is True
    assert "untrusted certificate" in output.getvalue()

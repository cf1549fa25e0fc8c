"""未署名・未信頼リリースの扱いを利用者に委ねるデリゲート。"""

import asyncio
from concurrent.futures import Future, ThreadPoolExecutor
import logging
import sys
from typing import Optional, TextIO

from ..models.release import PackageIdentity, Registry

logger = logging.getLogger(__name__)

AFFIRMATIVE_ANSWERS = frozenset({"y", "yes"})


class SignatureValidationDelegate:
    """対話的な判断を行うインターフェース。

    各メソッドは 1 回の問い合わせにつき 1 回だけ応答し、True は
    「懸念があっても続行する」を意味する。
    """

    async def on_unsigned(
        self, *, registry: Registry, package: PackageIdentity, version: str
    ) -> bool:
        raise NotImplementedError

    async def on_untrusted(
        self, *, registry: Registry, package: PackageIdentity, version: str
    ) -> bool:
        raise NotImplementedError


class AutoAcceptDelegate(SignatureValidationDelegate):
    """常に続行する。"""

    async def on_unsigned(
        self, *, registry: Registry, package: PackageIdentity, version: str
    ) -> bool:
        return True

    async def on_untrusted(
        self, *, registry: Registry, package: PackageIdentity, version: str
    ) -> bool:
        return True


class AutoRejectDelegate(SignatureValidationDelegate):
    """常に中止する（バッチ実行向け）。"""

    async def on_unsigned(
        self, *, registry: Registry, package: PackageIdentity, version: str
    ) -> bool:
        return False

    async def on_untrusted(
        self, *, registry: Registry, package: PackageIdentity, version: str
    ) -> bool:
        return False


class InteractivePromptDelegate(SignatureValidationDelegate):
    """端末で利用者に y/N を問い合わせる。

    入力の読み取りはイベントループを塞がないよう専用スレッドで行う。
    タイムアウト後も読み取りは残り、次の問い合わせがその応答を受け取る。
    タイムアウトや EOF は「続行しない」として扱う。
    """

    def __init__(
        self,
        *,
        input_stream: Optional[TextIO] = None,
        output_stream: Optional[TextIO] = None,
        timeout_seconds: Optional[float] = None,
    ) -> None:
        self.input_stream = input_stream or sys.stdin
        self.output_stream = output_stream or sys.stderr
        self.timeout_seconds = timeout_seconds
        self._reader = ThreadPoolExecutor(max_workers=1, thread_name_prefix="signing-prompt")
        self._pending_read: Optional[Future] = None

    async def on_unsigned(
        self, *, registry: Registry, package: PackageIdentity, version: str
    ) -> bool:
        return await self._ask(
            f"{package} version {version} from {registry} is not signed. "
            "Do you want to continue? (y/N) "
        )

    async def on_untrusted(
        self, *, registry: Registry, package: PackageIdentity, version: str
    ) -> bool:
        return await self._ask(
            f"{package} version {version} from {registry} is signed with an untrusted "
            "certificate. Do you want to continue? (y/N) "
        )

    async def _ask(self, prompt: str) -> bool:
        self.output_stream.write(prompt)
        self.output_stream.flush()

        # タイムアウトした読み取りは止められないため、次の問い合わせで引き継ぐ
        if self._pending_read is None or self._pending_read.done():
            if self._pending_read is not None:
                logger.debug("Discarding answer that arrived after the previous prompt timed out")
            self._pending_read = self._reader.submit(self.input_stream.readline)
        pending = self._pending_read

        try:
            answer = await asyncio.wait_for(
                asyncio.shield(asyncio.wrap_future(pending)),
                timeout=self.timeout_seconds,
            )
        except asyncio.TimeoutError:
            logger.warning("No answer within %s seconds, not continuing", self.timeout_seconds)
            self.output_stream.write("\n")
            return False

        self._pending_read = None
        return answer.strip().lower() in AFFIRMATIVE_ANSWERS

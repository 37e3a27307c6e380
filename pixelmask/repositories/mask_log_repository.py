# repositories/mask_log_repository.py
from pathlib import Path
from typing import Iterator, Union
import logging

from ..models.mask_log import MaskLog
from ..models.errors import MissingArtifactError, MalformedLogError, ArtifactWriteError

logger = logging.getLogger(__name__)


class MaskLogRepository:
    """
    Text storage for mask logs.

    • First line: the bare integer offset.
    • Every following line: "r g b" for one masked pixel.
    """

    # ---------- private helpers ----------
    @staticmethod
    def _open(path: Path):
        # binary: tokens go straight to int(), lines compare as raw bytes
        try:
            return path.open("rb")
        except FileNotFoundError as err:
            raise MissingArtifactError(f"Mask log not found: {path}") from err
        except OSError as err:
            raise MissingArtifactError(f"Mask log unreadable: {path}: {err}") from err

    @staticmethod
    def _tokens(fh) -> Iterator[bytes]:
        for line in fh:
            yield from line.split()

    # ---------- public API ----------
    def write(self, log: MaskLog, path: Union[str, Path]) -> Path:
        path = Path(path)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with path.open("w", encoding="utf-8", newline="\n") as out:
                for line in log.to_lines():
                    out.write(line + "\n")
        except OSError as err:
            raise ArtifactWriteError(f"Could not write mask log {path}: {err}") from err
        logger.debug(f"Wrote {path} (offset={log.offset}, pixels={log.n_pixels})")
        return path

    def read(self, path: Union[str, Path]) -> MaskLog:
        """
        Single streaming pass: offset, then triplets until end of input or
        the first non-integer token. A trailing partial triplet is dropped.
        """
        path = Path(path)
        with self._open(path) as fh:
            tokens = self._tokens(fh)

            first = next(tokens, None)
            if first is None:
                raise MalformedLogError(f"Mask log is empty: {path}")
            try:
                offset = int(first)
            except ValueError:
                raise MalformedLogError(f"Mask log offset is not an integer in {path}: {first!r}") from None
            if offset < 0:
                raise MalformedLogError(f"Mask log offset is negative in {path}: {offset}")

            values: list[int] = []
            stray = None
            for token in tokens:
                try:
                    values.append(int(token))
                except ValueError:
                    stray = token
                    break

        leftover = len(values) % 3
        if leftover:
            logger.warning(f"{path}: dropping incomplete trailing triplet ({leftover} value(s))")
            del values[len(values) - leftover:]
        if stray is not None:
            logger.warning(f"{path}: stopped parsing at non-integer token {stray!r}")

        return MaskLog(offset=offset, triplets=values)

    def read_lines(self, path: Union[str, Path]) -> Iterator[bytes]:
        """
        Yield raw lines split on newline bytes only, newline removed.
        A carriage return stays part of its line.
        """
        path = Path(path)
        with self._open(path) as fh:
            for line in fh:
                yield line[:-1] if line.endswith(b"\n") else line

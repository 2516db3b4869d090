"""Drive a WebAssembly build of the parser through ``wasmtime``.

The module exports ``alloc(len) -> ptr``, ``free(ptr, len)``, its linear
``memory`` and a parse function ``parse(ptr, len) -> ptr`` that returns the
address of a null-terminated UTF-8 JSON string (or 0 on failure). The caller
owns both the request buffer and the returned string and releases them.
"""
from __future__ import annotations

from pathlib import Path
from typing import Protocol

from wasmtime import Func, Instance, Linker, Memory, Module, Store, WasiConfig, WasmtimeError

from astlens.core.errors import ParseFailure, ParserLoadError
from astlens.core.logging import get_logger

logger = get_logger(__name__)

REQUIRED_EXPORTS = ("alloc", "free", "memory")
_READ_CHUNK = 4096


class ParserExports(Protocol):
    """Allocator, memory and parse entry point of a loaded parser module."""

    def alloc(self, length: int) -> int:
        ...

    def free(self, address: int, length: int) -> None:
        ...

    def parse(self, address: int, length: int) -> int:
        ...

    def read(self, start: int, stop: int) -> bytes:
        ...

    def write(self, address: int, data: bytes) -> None:
        ...

    def memory_size(self) -> int:
        ...


class WasmtimeExports:
    """:class:`ParserExports` backed by a ``wasmtime`` instance."""

    def __init__(self, store: Store, instance: Instance, export: str = "parseModule") -> None:
        exports = instance.exports(store)
        missing = [name for name in (*REQUIRED_EXPORTS, export) if exports.get(name) is None]
        if missing:
            raise ParserLoadError(f"Parser module is missing exports: {', '.join(missing)}")

        memory = exports["memory"]
        if not isinstance(memory, Memory):
            raise ParserLoadError("Parser export 'memory' is not a linear memory")
        for name in ("alloc", "free", export):
            if not isinstance(exports[name], Func):
                raise ParserLoadError(f"Parser export {name!r} is not a function")

        self._store = store
        self._memory = memory
        self._alloc = exports["alloc"]
        self._free = exports["free"]
        self._parse = exports[export]

    def alloc(self, length: int) -> int:
        return int(self._alloc(self._store, length) or 0)

    def free(self, address: int, length: int) -> None:
        self._free(self._store, address, length)

    def parse(self, address: int, length: int) -> int:
        try:
            return int(self._parse(self._store, address, length) or 0)
        except WasmtimeError as exc:
            raise ParseFailure(f"Parser trapped: {exc}") from exc

    def read(self, start: int, stop: int) -> bytes:
        return bytes(self._memory.read(self._store, start, stop))

    def write(self, address: int, data: bytes) -> None:
        self._memory.write(self._store, data, address)

    def memory_size(self) -> int:
        return self._memory.data_len(self._store)


class WasmParser:
    """Parser backed by a WebAssembly module."""

    def __init__(self, exports: ParserExports) -> None:
        self.exports = exports

    @classmethod
    def from_file(cls, path: str | Path, export: str = "parseModule") -> "WasmParser":
        path = Path(path)
        try:
            store = Store()
            wasi = WasiConfig()
            wasi.inherit_stderr()
            store.set_wasi(wasi)
            linker = Linker(store.engine)
            linker.define_wasi()
            module = Module.from_file(store.engine, str(path))
            instance = linker.instantiate(store, module)
        except (OSError, WasmtimeError) as exc:
            raise ParserLoadError(f"Could not load parser module {path}: {exc}") from exc
        logger.info("Loaded parser module %s", path)
        return cls(WasmtimeExports(store, instance, export))

    def parse_module(self, source: str) -> str:
        payload = source.encode("utf-8")
        request = self._write_request(payload)
        try:
            result = self.exports.parse(request, len(payload))
        finally:
            self.exports.free(request, len(payload))

        if result == 0:
            raise ParseFailure("Failed to parse source as a module")

        length = self._strlen(result)
        try:
            raw = self.exports.read(result, result + length)
        finally:
            # The response includes its null terminator.
            self.exports.free(result, length + 1)
        return raw.decode("utf-8", errors="replace")

    def _write_request(self, payload: bytes) -> int:
        address = self.exports.alloc(len(payload))
        if address == 0:
            raise ParseFailure(f"Parser allocator could not reserve {len(payload)} bytes")
        self.exports.write(address, payload)
        return address

    def _strlen(self, address: int) -> int:
        limit = self.exports.memory_size()
        cursor = address
        while cursor < limit:
            chunk = self.exports.read(cursor, min(cursor + _READ_CHUNK, limit))
            terminator = chunk.find(b"\x00")
            if terminator >= 0:
                return cursor - address + terminator
            cursor += len(chunk)
        raise ParseFailure("Parser response is not null-terminated")

#!filepath: srsglass/engines/dump_parser_engine.py
from __future__ import annotations

import gzip
import zlib
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import BinaryIO, Iterator, Optional

from srsglass.engines.types import RegionRecord
from srsglass.utils.errors import FormatError
from srsglass import logs


ROOT_TAG = "REGIONS"
REGION_TAG = "REGION"


class _CountingReader:
    """
    包装压缩字节流，只记录已读取的字节数（用于错误定位）。
    """

    def __init__(self, raw: BinaryIO):
        self._raw = raw
        self.consumed = 0

    def read(self, size: int = -1) -> bytes:
        chunk = self._raw.read(size)
        self.consumed += len(chunk)
        return chunk


class DumpParserEngine:
    """
    DumpParserEngine（纯解码，冻结）

    输入：
      - regions.xml.gz 的压缩字节流

    输出：
      - Iterator[RegionRecord]，顺序 = dump 声明顺序 = update 顺序

    设计原则：
      - 惰性：调用 iter_regions() 不读取任何字节，迭代时才解码
      - 流式：每个 REGION 处理完立即释放，内存 O(1) 条记录
      - 失败即中止：任何 REGION 缺字段都抛 FormatError，绝不跳过
        （跳过一个 region 会让其后所有 offset 错位）
    """

    def iter_regions(self, stream: BinaryIO) -> Iterator[RegionRecord]:
        counter = _CountingReader(stream)
        gz = gzip.GzipFile(fileobj=counter, mode="rb")

        index = 0
        depth = 0
        root: Optional[ET.Element] = None
        region_depth: Optional[int] = None

        try:
            for event, elem in ET.iterparse(gz, events=("start", "end")):
                if event == "start":
                    depth += 1

                    if root is None:
                        if elem.tag != ROOT_TAG:
                            raise FormatError(
                                f"unexpected root element <{elem.tag}>, expected <{ROOT_TAG}>"
                            )
                        root = elem
                        continue

                    if elem.tag == REGION_TAG:
                        if region_depth is not None:
                            raise FormatError(
                                f"nested <{REGION_TAG}> element",
                                region_index=index,
                            )
                        if depth != 2:
                            raise FormatError(
                                f"<{REGION_TAG}> must be a direct child of <{ROOT_TAG}>",
                                region_index=index,
                            )
                        region_depth = depth
                    elif depth == 2:
                        raise FormatError(
                            f"unexpected element <{elem.tag}> in <{ROOT_TAG}>, "
                            f"expected <{REGION_TAG}>",
                            region_index=index,
                        )
                    continue

                # ---------------- end ----------------
                depth -= 1

                if elem.tag == REGION_TAG and region_depth is not None and depth == region_depth - 1:
                    region_depth = None
                    record = self._build_record(elem, index)

                    # 已消费的元素立即释放
                    root.clear()

                    yield record
                    index += 1

        except ET.ParseError as e:
            line, column = getattr(e, "position", (None, None))
            raise FormatError(
                f"malformed dump document: {e}",
                region_index=index,
                line=line,
                column=column,
                byte_offset=counter.consumed,
            ) from e
        except (OSError, EOFError, zlib.error) as e:
            # gzip.BadGzipFile 是 OSError 的子类；截断的流抛 EOFError
            raise FormatError(
                f"cannot decompress dump: {e}",
                region_index=index,
                byte_offset=counter.consumed,
            ) from e

        logs.info(f"[Decoder] decoded {index} regions ({counter.consumed} compressed bytes)")

    def parse_file(self, path: str | Path) -> Iterator[RegionRecord]:
        """
        从本地 dump 文件解码（同样是惰性的，文件在迭代结束后关闭）。
        """
        path = Path(path)
        logs.info(f"[Decoder] reading {path}")
        with open(path, "rb") as f:
            yield from self.iter_regions(f)

    # --------------------------------------------------
    # record building
    # --------------------------------------------------
    def _build_record(self, elem: ET.Element, index: int) -> RegionRecord:
        name = _text(elem, "NAME")
        if not name:
            raise FormatError(f"<{REGION_TAG}> is missing <NAME>", region_index=index)

        raw_count = _text(elem, "NUMNATIONS")
        if raw_count is None or raw_count == "":
            raise FormatError(
                f"<{REGION_TAG}> is missing <NUMNATIONS>",
                region_index=index,
                region_name=name,
            )

        nation_count = _parse_int(raw_count, "NUMNATIONS", index, name)

        delegate_auth = _text(elem, "DELEGATEAUTH")
        factbook = _text(elem, "FACTBOOK")

        return RegionRecord(
            name=name,
            order_index=index,
            nation_count=nation_count,
            delegate_votes=_optional_int(elem, "DELEGATEVOTES", index, name),
            delegate_exec=None if delegate_auth is None else "X" in delegate_auth,
            factbook=factbook or None,
            last_major=_optional_int(elem, "LASTMAJORUPDATE", index, name),
            last_minor=_optional_int(elem, "LASTMINORUPDATE", index, name),
            embassies=tuple(
                e.text.strip() for e in elem.iter("EMBASSY") if e.text and e.text.strip()
            ),
        )


# ------------------------------------------------------------
# helpers
# ------------------------------------------------------------
def _text(elem: ET.Element, tag: str) -> Optional[str]:
    child = elem.find(tag)
    if child is None:
        return None
    return (child.text or "").strip()


def _parse_int(raw: str, tag: str, index: int, name: str) -> int:
    try:
        return int(raw)
    except ValueError:
        raise FormatError(
            f"<{tag}> is not an integer: {raw!r}",
            region_index=index,
            region_name=name,
        ) from None


def _optional_int(elem: ET.Element, tag: str, index: int, name: str) -> Optional[int]:
    raw = _text(elem, tag)
    if not raw:
        return None
    return _parse_int(raw, tag, index, name)


def decode_dump(stream: BinaryIO) -> Iterator[RegionRecord]:
    """Lazy sequence of RegionRecord from a gzip dump stream."""
    return DumpParserEngine().iter_regions(stream)

"""
Build-time compactor for tzfile trees.

Packs compiled zone files into ``zoneinfo.dat`` and writes ``zoneinfo.idx``,
a sorted fixed-record directory of every zone and link name, plus a
``zoneinfo.version`` marker.
"""

__all__: list[str] = []

"""labelkit — шаблоны этикеток, ZPL, предпросмотр и печать дубликатов."""

__version__ = "0.1.0"

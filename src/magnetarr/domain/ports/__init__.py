from .debrid import DebridServicePort
from .metadata import TitleResolverPort
from .torrent_index import TorrentIndexPort

__all__ = [
    "DebridServicePort",
    "TitleResolverPort",
    "TorrentIndexPort",
]

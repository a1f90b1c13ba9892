"""
Closed vocabularies of the qBittorrent WebUI.

Sort keys and filters are declared by display name; ``wire_name`` gives the
value the server expects in a query string. The timestamp field sets list,
by wire name, which fields of each record type carry epoch seconds.
"""

from enum import Enum

from .naming import to_wire_name


class WireEnum(Enum):
    @property
    def wire_name(self) -> str:
        return to_wire_name(self.name)


class Sort(WireEnum):
    Hash = "hash"
    Name = "name"
    Size = "size"
    Progress = "progress"
    Dlspeed = "dlspeed"
    Upspeed = "upspeed"
    Priority = "priority"
    NumSeeds = "num_seeds"
    NumComplete = "num_complete"
    NumLeechs = "num_leechs"
    NumIncomplete = "num_incomplete"
    Ratio = "ratio"
    Eta = "eta"
    State = "state"
    SeqDl = "seq_dl"
    FLPiecePrio = "f_l_piece_prio"
    Category = "category"
    SuperSeeding = "super_seeding"
    ForceStart = "force_start"


class Filter(WireEnum):
    All = "all"
    Downloading = "downloading"
    Completed = "completed"
    Paused = "paused"
    Active = "active"
    Inactive = "inactive"


TORRENT_TIMESTAMP_FIELDS = frozenset([
    "added_on",
    "completion_on",
    "last_activity",
    "seen_complete",
])

PROPERTIES_TIMESTAMP_FIELDS = frozenset([
    "addition_date",
    "completion_date",
    "creation_date",
    "last_seen",
])

NO_TIMESTAMP_FIELDS = frozenset()

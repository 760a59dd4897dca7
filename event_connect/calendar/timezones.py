"""
Timezone name resolution for calendar submissions.

The directory API's `Prefer: outlook.timezone` header takes Windows zone
names, so the registry below pairs each Windows name with its display
name and the IANA zone used to evaluate offsets. Entries are kept in
Windows registry order (by base offset), which decides ties.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, List, Optional, Sequence
from zoneinfo import ZoneInfo


DEFAULT_TIMEZONE = "Pacific Standard Time"


@dataclass(frozen=True)
class KnownTimeZone:
    name: str
    display_name: str
    iana: str

    def utc_offset_at(self, wall_time: datetime):
        """Offset of this zone when `wall_time` is read as local time here."""
        return wall_time.replace(tzinfo=ZoneInfo(self.iana)).utcoffset()


KNOWN_TIMEZONES: List[KnownTimeZone] = [
    KnownTimeZone("Dateline Standard Time", "(UTC-12:00) International Date Line West", "Etc/GMT+12"),
    KnownTimeZone("UTC-11", "(UTC-11:00) Coordinated Universal Time-11", "Etc/GMT+11"),
    KnownTimeZone("Aleutian Standard Time", "(UTC-10:00) Aleutian Islands", "America/Adak"),
    KnownTimeZone("Hawaiian Standard Time", "(UTC-10:00) Hawaii", "Pacific/Honolulu"),
    KnownTimeZone("Alaskan Standard Time", "(UTC-09:00) Alaska", "America/Anchorage"),
    KnownTimeZone("Pacific Standard Time (Mexico)", "(UTC-08:00) Baja California", "America/Tijuana"),
    KnownTimeZone("Pacific Standard Time", "(UTC-08:00) Pacific Time (US & Canada)", "America/Los_Angeles"),
    KnownTimeZone("US Mountain Standard Time", "(UTC-07:00) Arizona", "America/Phoenix"),
    KnownTimeZone("Mountain Standard Time", "(UTC-07:00) Mountain Time (US & Canada)", "America/Denver"),
    KnownTimeZone("Central America Standard Time", "(UTC-06:00) Central America", "America/Guatemala"),
    KnownTimeZone("Central Standard Time", "(UTC-06:00) Central Time (US & Canada)", "America/Chicago"),
    KnownTimeZone("Central Standard Time (Mexico)", "(UTC-06:00) Guadalajara, Mexico City, Monterrey", "America/Mexico_City"),
    KnownTimeZone("Canada Central Standard Time", "(UTC-06:00) Saskatchewan", "America/Regina"),
    KnownTimeZone("SA Pacific Standard Time", "(UTC-05:00) Bogota, Lima, Quito, Rio Branco", "America/Bogota"),
    KnownTimeZone("Eastern Standard Time", "(UTC-05:00) Eastern Time (US & Canada)", "America/New_York"),
    KnownTimeZone("US Eastern Standard Time", "(UTC-05:00) Indiana (East)", "America/Indiana/Indianapolis"),
    KnownTimeZone("Atlantic Standard Time", "(UTC-04:00) Atlantic Time (Canada)", "America/Halifax"),
    KnownTimeZone("SA Western Standard Time", "(UTC-04:00) Georgetown, La Paz, Manaus, San Juan", "America/La_Paz"),
    KnownTimeZone("Newfoundland Standard Time", "(UTC-03:30) Newfoundland", "America/St_Johns"),
    KnownTimeZone("E. South America Standard Time", "(UTC-03:00) Brasilia", "America/Sao_Paulo"),
    KnownTimeZone("Argentina Standard Time", "(UTC-03:00) City of Buenos Aires", "America/Argentina/Buenos_Aires"),
    KnownTimeZone("UTC-02", "(UTC-02:00) Coordinated Universal Time-02", "Etc/GMT+2"),
    KnownTimeZone("Azores Standard Time", "(UTC-01:00) Azores", "Atlantic/Azores"),
    KnownTimeZone("Cape Verde Standard Time", "(UTC-01:00) Cabo Verde Is.", "Atlantic/Cape_Verde"),
    KnownTimeZone("UTC", "(UTC) Coordinated Universal Time", "Etc/UTC"),
    KnownTimeZone("GMT Standard Time", "(UTC+00:00) Dublin, Edinburgh, Lisbon, London", "Europe/London"),
    KnownTimeZone("Greenwich Standard Time", "(UTC+00:00) Monrovia, Reykjavik", "Atlantic/Reykjavik"),
    KnownTimeZone("W. Europe Standard Time", "(UTC+01:00) Amsterdam, Berlin, Bern, Rome, Stockholm, Vienna", "Europe/Berlin"),
    KnownTimeZone("Romance Standard Time", "(UTC+01:00) Brussels, Copenhagen, Madrid, Paris", "Europe/Paris"),
    KnownTimeZone("W. Central Africa Standard Time", "(UTC+01:00) West Central Africa", "Africa/Lagos"),
    KnownTimeZone("GTB Standard Time", "(UTC+02:00) Athens, Bucharest", "Europe/Bucharest"),
    KnownTimeZone("South Africa Standard Time", "(UTC+02:00) Harare, Pretoria", "Africa/Johannesburg"),
    KnownTimeZone("FLE Standard Time", "(UTC+02:00) Helsinki, Kyiv, Riga, Sofia, Tallinn, Vilnius", "Europe/Helsinki"),
    KnownTimeZone("Israel Standard Time", "(UTC+02:00) Jerusalem", "Asia/Jerusalem"),
    KnownTimeZone("Arab Standard Time", "(UTC+03:00) Kuwait, Riyadh", "Asia/Riyadh"),
    KnownTimeZone("Russian Standard Time", "(UTC+03:00) Moscow, St. Petersburg", "Europe/Moscow"),
    KnownTimeZone("Iran Standard Time", "(UTC+03:30) Tehran", "Asia/Tehran"),
    KnownTimeZone("Arabian Standard Time", "(UTC+04:00) Abu Dhabi, Muscat", "Asia/Dubai"),
    KnownTimeZone("Afghanistan Standard Time", "(UTC+04:30) Kabul", "Asia/Kabul"),
    KnownTimeZone("Pakistan Standard Time", "(UTC+05:00) Islamabad, Karachi", "Asia/Karachi"),
    KnownTimeZone("India Standard Time", "(UTC+05:30) Chennai, Kolkata, Mumbai, New Delhi", "Asia/Kolkata"),
    KnownTimeZone("Nepal Standard Time", "(UTC+05:45) Kathmandu", "Asia/Kathmandu"),
    KnownTimeZone("Bangladesh Standard Time", "(UTC+06:00) Dhaka", "Asia/Dhaka"),
    KnownTimeZone("SE Asia Standard Time", "(UTC+07:00) Bangkok, Hanoi, Jakarta", "Asia/Bangkok"),
    KnownTimeZone("China Standard Time", "(UTC+08:00) Beijing, Chongqing, Hong Kong, Urumqi", "Asia/Shanghai"),
    KnownTimeZone("Singapore Standard Time", "(UTC+08:00) Kuala Lumpur, Singapore", "Asia/Singapore"),
    KnownTimeZone("Tokyo Standard Time", "(UTC+09:00) Osaka, Sapporo, Tokyo", "Asia/Tokyo"),
    KnownTimeZone("Korea Standard Time", "(UTC+09:00) Seoul", "Asia/Seoul"),
    KnownTimeZone("Cen. Australia Standard Time", "(UTC+09:30) Adelaide", "Australia/Adelaide"),
    KnownTimeZone("AUS Eastern Standard Time", "(UTC+10:00) Canberra, Melbourne, Sydney", "Australia/Sydney"),
    KnownTimeZone("West Pacific Standard Time", "(UTC+10:00) Guam, Port Moresby", "Pacific/Port_Moresby"),
    KnownTimeZone("Central Pacific Standard Time", "(UTC+11:00) Solomon Is., New Caledonia", "Pacific/Guadalcanal"),
    KnownTimeZone("New Zealand Standard Time", "(UTC+12:00) Auckland, Wellington", "Pacific/Auckland"),
    KnownTimeZone("Tonga Standard Time", "(UTC+13:00) Nuku'alofa", "Pacific/Tongatapu"),
    KnownTimeZone("Line Islands Standard Time", "(UTC+14:00) Kiritimati Island", "Pacific/Kiritimati"),
]


def matching_timezones(value: datetime, zones: Optional[Iterable[KnownTimeZone]] = None) -> List[KnownTimeZone]:
    """Zones whose offset at `value`'s local date/time equals `value`'s own offset."""
    offset = value.utcoffset()
    if offset is None:
        return []

    wall_time = value.replace(tzinfo=None)
    candidates = KNOWN_TIMEZONES if zones is None else zones
    return [zone for zone in candidates if zone.utc_offset_at(wall_time) == offset]


def resolve_timezone_name(
    value: datetime,
    zones: Optional[Iterable[KnownTimeZone]] = None,
    default: str = DEFAULT_TIMEZONE,
) -> str:
    """
    Pick a timezone name for an offset-aware timestamp.

    Among the zones matching the offset, the first whose display name
    mentions "US" wins, else the first match. Falls back to `default`
    when the timestamp is naive or no zone matches.
    """
    matches = matching_timezones(value, zones)
    if not matches:
        return default

    for zone in matches:
        if "US" in zone.display_name:
            return zone.name
    return matches[0].name


def find_timezone(name: str, zones: Optional[Sequence[KnownTimeZone]] = None) -> Optional[KnownTimeZone]:
    for zone in KNOWN_TIMEZONES if zones is None else zones:
        if zone.name == name:
            return zone
    return None


def to_wall_time(value: datetime, name: str) -> datetime:
    """
    Express `value` as wall-clock time in the named zone.

    Naive values and unknown zone names are returned unchanged.
    """
    zone = find_timezone(name)
    if value.tzinfo is None or zone is None:
        return value
    return value.astimezone(ZoneInfo(zone.iana))

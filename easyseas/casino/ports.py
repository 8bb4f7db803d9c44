"""Port classification used by the casino rules.

Casinos must stay closed inside US (and US territory) waters. Mexican and other foreign
ports only close the casino while the ship is docked. A few US ports (Catalina) are far
enough offshore that the ship reaches international waters during the day.
"""

US_PORTS = [
    'Miami', 'Fort Lauderdale', 'Port Everglades', 'Tampa', 'Port Canaveral', 'Jacksonville',
    'Galveston', 'New Orleans', 'San Diego', 'Los Angeles', 'Long Beach', 'San Francisco',
    'Seattle', 'Honolulu', 'Bayonne', 'Cape Liberty', 'New York', 'Baltimore', 'Boston',
    'Charleston', 'Savannah', 'Mobile', 'Houston', 'Portland', 'Juneau', 'Ketchikan', 'Skagway',
    'Sitka', 'Hilo', 'Kahului', 'Kona', 'Key West', 'Puerto Rico', 'San Juan',
]

# State suffixes as they appear in "City, ST" port names
US_PORT_HINTS = [
    'usa', 'united states', ', fl', ', tx', ', ca', ', wa', ', la', ', nj', ', md', ', ma',
    ', sc', ', ga', ', al', ', hi', ', ak',
]

NEARSHORE_US_PORTS = ['Catalina Island', 'Catalina', 'Avalon', 'Two Harbors']

US_TERRITORIES = [
    'Puerto Rico', 'San Juan', 'US Virgin Islands', 'St. Thomas', 'St. John', 'St. Croix',
    'Guam', 'American Samoa',
]

MEXICAN_PORTS = [
    'Cabo San Lucas', 'Cabo', 'Ensenada', 'Cozumel', 'Puerto Vallarta', 'Costa Maya',
    'Puerto Costa Maya', 'Mazatlan', 'La Paz', 'Loreto', 'Manzanillo', 'Progreso',
    'Zihuatanejo', 'Ixtapa', 'Acapulco', 'Huatulco', 'Cancun', 'Playa del Carmen',
]

SEA_DAY_NAMES = {'at sea', 'sea day', 'cruising'}


def _normalize(port: str | None) -> str:
    return (port or '').lower().strip()


def _matches_any(port: str | None, names: list[str]) -> bool:
    normalized = _normalize(port)
    return bool(normalized) and any(name.lower() in normalized for name in names)


def is_us_port(port: str | None) -> bool:
    return _matches_any(port, US_PORTS) or _matches_any(port, US_PORT_HINTS)


def is_us_territory(port: str | None) -> bool:
    return _matches_any(port, US_TERRITORIES)


def is_nearshore_us_port(port: str | None) -> bool:
    return _matches_any(port, NEARSHORE_US_PORTS)


def is_mexican_port(port: str | None) -> bool:
    return _matches_any(port, MEXICAN_PORTS) or _matches_any(port, ['mexico', 'méxico'])


def is_us_restricted_port(port: str | None) -> bool:
    """True where the casino stays shut for the whole port day."""
    if is_us_territory(port):
        return True
    return is_us_port(port) and not is_nearshore_us_port(port)


def is_sea_day_name(port: str | None) -> bool:
    normalized = _normalize(port)
    return normalized in SEA_DAY_NAMES or 'sea day' in normalized or 'at sea' in normalized


def port_kind(port: str | None) -> str:
    if is_nearshore_us_port(port):
        return 'Nearshore US port'
    if is_mexican_port(port):
        return 'Mexican port'
    return 'Foreign port'

"""Input validation for pool definitions."""

from __future__ import annotations

from chunk_capacity.profiles import Profile
from chunk_capacity.types import InvalidInputError
from chunk_capacity.units import parse_size

_CUSTOM_KEYS = ("copies", "stripe_min", "stripe_max", "parity")


def validate_pool(data: object) -> list[str]:
    """Validate a pool definition. Returns list of error messages (empty = valid).

    Checks:
    - Top level is an object with a "drives" list
    - Profile is a known name or a custom configuration object
    - chunk_size, if present, parses as a positive size
    - Every drive has a parseable, positive size
    """
    if not isinstance(data, dict):
        return [f"Pool definition must be an object, got {type(data).__name__}"]

    errors: list[str] = []

    if "profile" not in data:
        errors.append("Missing 'profile'")
    else:
        errors.extend(validate_profile(data["profile"]))

    if "chunk_size" in data:
        try:
            if parse_size(data["chunk_size"]) <= 0:
                errors.append("chunk_size must be positive")
        except InvalidInputError as e:
            errors.append(f"chunk_size: {e}")

    drives = data.get("drives")
    if not isinstance(drives, list):
        errors.append("'drives' must be a list")
        return errors
    if not drives:
        errors.append("'drives' must not be empty")

    seen_ids: set[str] = set()
    for i, entry in enumerate(drives):
        if isinstance(entry, dict):
            if "size" not in entry:
                errors.append(f"Drive {i}: missing 'size'")
                continue
            size = entry["size"]
            drive_id = entry.get("id")
            if drive_id is not None:
                if not isinstance(drive_id, str):
                    errors.append(f"Drive {i}: 'id' must be a string")
                elif drive_id in seen_ids:
                    errors.append(f"Drive {i}: duplicate id {drive_id!r}")
                else:
                    seen_ids.add(drive_id)
        else:
            size = entry

        if not isinstance(size, (str, int)) or isinstance(size, bool):
            errors.append(f"Drive {i}: size must be a string or integer, got {size!r}")
            continue
        try:
            if parse_size(size) <= 0:
                errors.append(f"Drive {i}: size must be positive")
        except InvalidInputError as e:
            errors.append(f"Drive {i}: {e}")

    return errors


def validate_profile(profile: object) -> list[str]:
    """Validate a profile name or custom configuration object."""
    errors: list[str] = []

    if isinstance(profile, str):
        names = {p.value for p in Profile}
        if profile.strip().lower() not in names:
            errors.append(
                f"Unknown profile {profile!r} "
                f"(expected one of: {', '.join(sorted(names))})"
            )
        return errors

    if not isinstance(profile, dict):
        errors.append(f"Profile must be a name or an object, got {profile!r}")
        return errors

    for key in _CUSTOM_KEYS:
        if key not in profile:
            if key != "stripe_max":
                errors.append(f"Custom profile: missing {key!r}")
            continue
        value = profile[key]
        if key == "stripe_max" and value is None:
            continue
        if isinstance(value, bool) or not isinstance(value, int):
            errors.append(f"Custom profile: {key!r} must be an integer, got {value!r}")

    unknown = set(profile) - set(_CUSTOM_KEYS)
    if unknown:
        errors.append(f"Custom profile: unknown keys {sorted(unknown)}")

    return errors

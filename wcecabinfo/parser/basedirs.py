"""
Fixed lookup tables: base directories, registry hive roots, target
architectures and the per-platform meaning of the %CEn% placeholders.
"""

import re

INSTALL_DIR = "%InstallDir%"

# index is the base directory code used by link entries
BASE_DIRS = [INSTALL_DIR] + [f"%CE{n}%" for n in range(1, 18)]

HIVE_ROOTS = {
    1: "HKEY_CLASSES_ROOT",
    2: "HKEY_CURRENT_USER",
    3: "HKEY_LOCAL_MACHINE",
    4: "HKEY_USERS",
}

ARCHITECTURES = {
    103: "SH3",
    104: "SH4",
    386: "X86",
    486: "X86",
    586: "X86",
    601: "PPC601",
    603: "PPC603",
    604: "PPC604",
    620: "PPC620",
    821: "MOTOROLA821",
    1824: "ARM",    # ARM 720
    2080: "ARM",    # ARM 820
    2336: "ARM",    # ARM 920
    2577: "ARM",    # StrongARM
    4000: "MIPS",
    10003: "SH3",   # Hitachi SH3
    10004: "SH3",   # Hitachi SH3E
    10005: "SH4",
    21064: "ALPHA",
    70001: "THUMB",  # ARM 7TDMI
}

# Handheld PC
DIRECTORY_MAPPINGS_HPC = {
    "%CE1%": "\\Program Files",
    "%CE2%": "\\Windows",
    "%CE3%": "\\Windows\\Desktop",
    "%CE4%": "\\Windows\\StartUp",
    "%CE5%": "\\My Documents",
    "%CE6%": "\\Program Files\\Accessories",
    "%CE7%": "\\Program Files\\Communications",
    "%CE8%": "\\Program Files\\Games",
    "%CE9%": "\\Program Files\\Pocket Outlook",
    "%CE10%": "\\Program Files\\Office",
    "%CE11%": "\\Windows\\Programs",
    "%CE12%": "\\Windows\\Programs\\Accessories",
    "%CE13%": "\\Windows\\Programs\\Communications",
    "%CE14%": "\\Windows\\Programs\\Games",
    "%CE15%": "\\Windows\\Fonts",
    "%CE16%": "\\Windows\\Recent",
    "%CE17%": "\\Windows\\Favorites",
}

# Palm-size PC
DIRECTORY_MAPPINGS_PSPC = {
    "%CE1%": "\\Program Files",
    "%CE2%": "\\Windows",
    "%CE4%": "\\Windows\\StartUp",
    "%CE5%": "\\My Documents",
    "%CE6%": "\\Program Files\\Accessories",
    "%CE7%": "\\Program Files\\Communications",
    "%CE8%": "\\Program Files\\Games",
    "%CE11%": "\\Windows\\Start Menu\\Programs",
    "%CE12%": "\\Windows\\Start Menu\\Accessories",
    "%CE13%": "\\Windows\\Start Menu\\Communications",
    "%CE14%": "\\Windows\\Start Menu\\Games",
    "%CE15%": "\\Windows\\Fonts",
    "%CE17%": "\\Windows\\Start Menu",
}

# Pocket PC
DIRECTORY_MAPPINGS_PPC = {
    "%CE1%": "\\Program Files",
    "%CE2%": "\\Windows",
    "%CE4%": "\\Windows\\StartUp",
    "%CE5%": "\\My Documents",
    "%CE11%": "\\Windows\\Start Menu\\Programs",
    "%CE14%": "\\Windows\\Start Menu\\Games",
    "%CE15%": "\\Windows\\Fonts",
    "%CE17%": "\\Windows\\Start Menu",
}

PLATFORMS = {
    'hpc': DIRECTORY_MAPPINGS_HPC,
    'pspc': DIRECTORY_MAPPINGS_PSPC,
    'ppc': DIRECTORY_MAPPINGS_PPC,
}

PLACEHOLDER_RE = re.compile(r"%CE\d+%")


def architecture_name(code):
    return ARCHITECTURES.get(code)


def expand_placeholders(path, platform):
    """
    Replace %CEn% placeholders with the directory they denote on `platform`.
    Placeholders the platform does not define are left in place.
    """
    if not platform:
        return path
    mapping = PLATFORMS[platform]
    return PLACEHOLDER_RE.sub(lambda m: mapping.get(m.group(0), m.group(0)), path)

"""
Getting the raw .000 bytes: straight from a file or stdin, or out of a
.cab cabinet through the external cabextract tool.
"""

import logging
import shutil
import struct
import subprocess

from wcecabinfo.parser.structure import CE_CAB_000_HEADER_SIGNATURE, CE_CAB_HEADER_SIGNATURE

CABEXTRACT_URL = "https://www.cabextract.org.uk/"


class CabExtractError(Exception):
    pass


def signature_of(data):
    if len(data) < 4:
        return None
    return struct.unpack_from("<I", data, 0)[0]


def is_cab(data):
    return signature_of(data) == CE_CAB_HEADER_SIGNATURE


def is_000(data):
    return signature_of(data) == CE_CAB_000_HEADER_SIGNATURE


def extract_000(path):
    """Run cabextract on `path` and return the bytes of its *.000 member."""
    executable = shutil.which("cabextract")
    if not executable:
        raise CabExtractError(f"cabextract not found. Please install this dependency. {CABEXTRACT_URL}")

    logging.debug(f"Extracting *.000 from {path} with {executable}")
    try:
        result = subprocess.run(
            [executable, "--pipe", "--filter", "*.000", str(path)],
            capture_output=True, check=True,
        )
    except subprocess.CalledProcessError as e:
        stderr = e.stderr.decode(errors='replace').strip()
        raise CabExtractError(f"cabextract failed with exit status {e.returncode}: {stderr}") from e

    if not result.stdout:
        raise CabExtractError(f"{path} contains no .000 member")
    return result.stdout


def load_descriptor_bytes(fh):
    """
    Read a .000 descriptor from an open binary file. Cabinets are handed to
    cabextract, which needs a real path, so they cannot come from stdin.
    """
    data = fh.read()
    name = getattr(fh, 'name', '<stdin>')
    if not data:
        raise CabExtractError(f"{name}: input size is 0")

    if is_cab(data):
        logging.debug(f"{name} was identified as a CAB file by file signature")
        if not isinstance(name, str) or name == '<stdin>':
            raise CabExtractError("Piping in CAB files is not supported, pass the path instead")
        if not name.lower().endswith(".cab"):
            logging.warning(f"{name} appears to be a CAB file, but does not have a .cab extension")
        return extract_000(name)

    if is_000(data):
        logging.debug(f"{name} was identified as a 000 file by file signature")
        if isinstance(name, str) and name != '<stdin>' and not name.endswith(".000"):
            logging.warning(f"{name} appears to be a 000 file, but does not have a .000 extension")
    return data

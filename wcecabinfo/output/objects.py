"""Json output mode - the descriptor as one nested JSON object."""
import json

from wcecabinfo.output import OutputHandler
from wcecabinfo.parser.regvalue import hex_bytes


class BaseSafeEncoder(json.JSONEncoder):
    def default(self, obj):
        if isinstance(obj, bytes):
            return hex_bytes(obj)
        return json.JSONEncoder.default(self, obj)


def version_object(version):
    return {
        'major': version.major,
        'minor': version.minor,
        'string': str(version),
    }


def file_object(entry):
    obj = {
        'id': entry.id,
        'name': entry.name,
        'directory': entry.directory,
    }
    # only the flags that are set appear
    for name in entry.flag_names():
        obj[name] = True
    return obj


def registry_object(entry):
    return {
        'path': entry.path,
        'name': entry.name,
        'dataType': entry.value.data_type,
        'value': entry.value.json_value(),
    }


def link_object(entry):
    return {
        'id': entry.id,
        'isFile': entry.is_file,
        'targetId': entry.target_id,
        'linkPath': entry.link_path,
        'targetPath': entry.target_path,
    }


def descriptor_object(cab):
    """Build the structured record export of a Descriptor."""
    obj = {
        'appName': cab.app_name,
        'provider': cab.provider,
        'architecture': cab.architecture,
    }

    if cab.unsupported:
        obj['unsupported'] = list(cab.unsupported)

    if cab.min_ce_version:
        obj['minCeVersion'] = version_object(cab.min_ce_version)
    if cab.max_ce_version:
        obj['maxCeVersion'] = version_object(cab.max_ce_version)
    if cab.min_ce_build_number:
        obj['minCeBuildNumber'] = cab.min_ce_build_number
    if cab.max_ce_build_number:
        obj['maxCeBuildNumber'] = cab.max_ce_build_number

    obj['directories'] = [{'id': d.id, 'path': d.path} for d in cab.directories]
    obj['files'] = [file_object(f) for f in cab.files]
    obj['registryEntries'] = [registry_object(k) for k in cab.reg_keys]
    obj['links'] = [link_object(l) for l in cab.links]
    return obj


class JsonOutput(OutputHandler):
    """Handles Json-specific output processing."""

    extension = "json"

    def render(self):
        return json.dumps(descriptor_object(self.cab), indent=2, cls=BaseSafeEncoder) + "\n"

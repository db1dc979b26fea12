import json

import pytest

from wcecabinfo.output.objects import JsonOutput, descriptor_object
from wcecabinfo.output.registry import RegistryOutput
from wcecabinfo.output.summary import SummaryOutput, summary_fields
from wcecabinfo.parser import decode

from tests.builder import (
    REG_DWORD,
    build_descriptor,
    file_entry,
    reghive_entry,
    regkey_entry,
    sample_descriptor,
    string_entry,
)

FLAG_KEYS = {
    'isReferenceCountingSharedFile', 'ignoreCabFileDate', 'doNotOverWriteIfTargetIsNewer',
    'selfRegisterDll', 'doNotCopyUnlessTargetExists', 'overWriteTargetIfExists',
    'doNotSkip', 'warnIfSkipped',
}


def test_json_top_level():
    obj = descriptor_object(decode(sample_descriptor()))

    assert obj['appName'] == "Test App"
    assert obj['provider'] == "Test Provider"
    assert obj['architecture'] == "ARM"
    assert obj['unsupported'] == ["HPC", "JUPITER"]
    assert obj['minCeVersion'] == {'major': 3, 'minor': 0, 'string': "3.0"}
    assert obj['maxCeVersion'] == {'major': 5, 'minor': 1, 'string': "5.1"}
    assert 'minCeBuildNumber' not in obj
    assert obj['maxCeBuildNumber'] == 9999
    assert obj['directories'] == [{'id': 1, 'path': "%CE1%\\Test App"}]


def test_json_omits_absent_fields():
    obj = descriptor_object(decode(build_descriptor()))
    assert obj['architecture'] is None
    for key in ('unsupported', 'minCeVersion', 'maxCeVersion', 'minCeBuildNumber', 'maxCeBuildNumber'):
        assert key not in obj
    assert obj['files'] == [] and obj['links'] == [] and obj['registryEntries'] == []


def test_json_single_file_flag():
    obj = descriptor_object(decode(build_descriptor(files=[file_entry(1, 0, b"shared.dll", flags_upper=0x8000)])))
    entry = obj['files'][0]
    assert entry['name'] == "shared.dll"
    assert entry['directory'] == "%InstallDir%"
    assert {k for k in entry if k in FLAG_KEYS} == {'isReferenceCountingSharedFile'}
    assert entry['isReferenceCountingSharedFile'] is True


def test_json_registry_and_links():
    obj = descriptor_object(decode(sample_descriptor()))

    assert obj['registryEntries'][0] == {
        'path': "HKEY_LOCAL_MACHINE\\Software\\Vendor",
        'name': "Count",
        'dataType': "REG_DWORD",
        'value': 1,
    }
    assert obj['registryEntries'][1]['name'] is None
    assert obj['registryEntries'][2]['value'] == "DE,AD"
    assert obj['registryEntries'][3]['value'] == ["A", "B"]

    assert obj['links'][0] == {
        'id': 1,
        'isFile': True,
        'targetId': 1,
        'linkPath': "%InstallDir%\\Test App.lnk",
        'targetPath': "%CE1%\\Test App\\app.exe",
    }


def test_json_render_is_valid_json():
    text = JsonOutput(decode(sample_descriptor())).render()
    assert json.loads(text)['appName'] == "Test App"


def test_registry_text():
    text = RegistryOutput(decode(sample_descriptor())).render()
    assert text.splitlines() == [
        "REGEDIT4",
        "",
        "[HKEY_LOCAL_MACHINE\\Software\\Vendor]",
        '"Count"=dword:00000001',
        '@="default"',
        "",
        "[HKEY_CURRENT_USER\\Software]",
        '"Blob"=hex:DE,AD',
        "",
        "[HKEY_LOCAL_MACHINE\\Software\\Vendor]",
        '"List"=hex(7):41,00,42,00,00',
        "",
    ]


def test_registry_dword_line():
    data = build_descriptor(
        strings=[string_entry(1, b"Key")],
        reg_hives=[reghive_entry(1, 3, [1])],
        reg_keys=[regkey_entry(1, 1, REG_DWORD, b"Value", b"\x01\x00\x00\x00")],
    )
    text = RegistryOutput(decode(data)).render()
    assert '"Value"=dword:00000001' in text.splitlines()


def test_registry_without_keys():
    assert RegistryOutput(decode(build_descriptor())).render() == "REGEDIT4\n\n"


def test_summary():
    text = SummaryOutput(decode(sample_descriptor())).render()
    assert text.splitlines() == [
        "appName: Test App",
        "provider: Test Provider",
        "architecture: ARM",
        "unsupported: HPC, JUPITER",
        "minCeVersion: 3.0",
        "maxCeVersion: 5.1",
        "maxCeBuildNumber: 9999",
    ]


def test_summary_omits_absent_fields():
    fields = summary_fields(decode(build_descriptor()))
    assert list(fields) == ['appName', 'provider']


def test_summary_basic():
    text = SummaryOutput(decode(sample_descriptor()), basic=True).render()
    assert text == "WCEApp: Test App\nWCEArch: ARM\nWCEVersion: 3.0\n"


def test_summary_field_is_case_insensitive():
    cab = decode(sample_descriptor())
    assert SummaryOutput(cab, field="PROVIDER").render() == "Test Provider\n"
    assert SummaryOutput(cab, field="maxcebuildnumber").render() == "9999\n"
    with pytest.raises(KeyError):
        SummaryOutput(cab, field="minCeBuildNumber").render()


def test_process_writes_into_output_folder(tmp_path):
    handler = JsonOutput(decode(sample_descriptor()), tmp_path, basename="sample")
    handler.process()
    written = tmp_path / "sample.json"
    assert json.loads(written.read_text(encoding="utf-8"))['provider'] == "Test Provider"


def test_process_prints_without_output_folder(capsys):
    RegistryOutput(decode(sample_descriptor())).process()
    assert capsys.readouterr().out.startswith("REGEDIT4\n")

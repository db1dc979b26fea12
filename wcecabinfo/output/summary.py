"""Summary output mode - one "field: value" line per present header field."""
from requests.structures import CaseInsensitiveDict

from wcecabinfo.output import OutputHandler


def summary_fields(cab):
    """
    Ordered, case-insensitive mapping of summary field name to text.
    Fields that are absent from the descriptor are left out.
    """
    fields = CaseInsensitiveDict()
    fields['appName'] = cab.app_name
    fields['provider'] = cab.provider
    if cab.architecture:
        fields['architecture'] = cab.architecture
    if cab.unsupported:
        fields['unsupported'] = ", ".join(cab.unsupported)
    if cab.min_ce_version:
        fields['minCeVersion'] = str(cab.min_ce_version)
    if cab.max_ce_version:
        fields['maxCeVersion'] = str(cab.max_ce_version)
    if cab.min_ce_build_number:
        fields['minCeBuildNumber'] = str(cab.min_ce_build_number)
    if cab.max_ce_build_number:
        fields['maxCeBuildNumber'] = str(cab.max_ce_build_number)
    return fields


class SummaryOutput(OutputHandler):
    """Handles Summary-specific output processing."""

    extension = "txt"

    def __init__(self, *args, basic=False, field=None, **kwargs):
        super().__init__(*args, **kwargs)
        self.basic = basic
        self.field = field

    def render_basic(self):
        lines = [f"WCEApp: {self.cab.app_name}"]
        if self.cab.architecture:
            lines.append(f"WCEArch: {self.cab.architecture}")
        if self.cab.min_ce_version:
            lines.append(f"WCEVersion: {self.cab.min_ce_version}")
        return "\n".join(lines) + "\n"

    def render_field(self):
        fields = summary_fields(self.cab)
        if self.field not in fields:
            raise KeyError(self.field)
        return fields[self.field] + "\n"

    def render(self):
        if self.field:
            return self.render_field()
        if self.basic:
            return self.render_basic()
        return "".join(f"{k}: {v}\n" for k, v in summary_fields(self.cab).items())

"""Registry output mode - the registry keys as a REGEDIT4 .reg file."""
from wcecabinfo.output import OutputHandler
from wcecabinfo.parser.regvalue import escape_reg_string

REG_HEADER = "REGEDIT4"


class RegistryEncoder:
    """Encoder for .reg text."""

    def encode_value(self, entry):
        if entry.name is None:
            return f"@={entry.value.reg_text()}"
        return f'"{escape_reg_string(entry.name)}"={entry.value.reg_text()}'

    def encode(self, reg_keys):
        lines = [REG_HEADER]
        current_hive = None
        for entry in reg_keys:
            # a new section only when the owning hive changes from the previous key
            if entry.hive_id != current_hive:
                current_hive = entry.hive_id
                lines.append("")
                lines.append(f"[{entry.path}]")
            lines.append(self.encode_value(entry))
        lines.append("")
        return "\n".join(lines) + "\n"


class RegistryOutput(OutputHandler):
    """Handles Registry-specific output processing."""

    extension = "reg"

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.encoder = RegistryEncoder()

    def render(self):
        return self.encoder.encode(self.cab.reg_keys)

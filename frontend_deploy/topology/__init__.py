"""Site topology assembly and output export."""

from .assembler import assemble_topology
from .exporter import ExportedOutput, expected_output_names, export_outputs
from .models import (
  AliasRecord,
  Certificate,
  Distributor,
  Edge,
  HostedZone,
  OriginStore,
  Role,
  Topology,
)

__all__ = [
  "AliasRecord",
  "Certificate",
  "Distributor",
  "Edge",
  "ExportedOutput",
  "HostedZone",
  "OriginStore",
  "Role",
  "Topology",
  "assemble_topology",
  "expected_output_names",
  "export_outputs",
]

"""Best-effort browser fingerprint collector, run in the visitor's browser by PyScript."""

from .collect import FingerprintCollector, ProbeGroup
from .signals import Absent, Present, Probe

__all__ = ["FingerprintCollector", "ProbeGroup", "Absent", "Present", "Probe"]

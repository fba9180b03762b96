"""Light-cycle arena: four AI agents racing on a bordered grid."""

__version__ = "0.1.0"

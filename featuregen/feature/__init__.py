"""Feature file assembly and serialization."""

from .assembler import DEFAULT_FEATURE_TAGS, FeatureAssembler, common_leading_steps
from .models import Background, FeatureFile, FeatureInfo, FeatureMetadata
from .serializer import FeatureSerializer, OutputFormat

__all__ = [
    "DEFAULT_FEATURE_TAGS",
    "FeatureAssembler",
    "common_leading_steps",
    "Background",
    "FeatureFile",
    "FeatureInfo",
    "FeatureMetadata",
    "FeatureSerializer",
    "OutputFormat",
]

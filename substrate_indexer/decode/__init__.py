# substrate_indexer/decode/__init__.py

from .interfaces import ChainStateClient, FeeOracle, AccountUpdater, BlockSource
from .description_cache import DescriptionCache
from .log_decoder import LogDecoder
from .session_resolver import SessionResolver, extract_author
from .spec_version import SpecVersionTracker
from .extension_decoder import ExtensionDecoder
from .extrinsic_decoder import ExtrinsicDecoder
from .event_decoder import EventDecoder

# substrate_indexer/pipeline/__init__.py

from .indexing_pipeline import IndexingPipeline, BlockOutcome, PipelineSummary, gather_in_order

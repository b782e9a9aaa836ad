from affinity_chain.utils.chain_io import ChainInputError, format_result, parse_chain_text

__all__ = [
    "ChainInputError",
    "format_result",
    "parse_chain_text",
]

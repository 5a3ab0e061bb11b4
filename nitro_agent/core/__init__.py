from .nitro_tool import NITRO_TOOL, NitroQuotePipeline, run_nitro_tool

__all__ = ["NITRO_TOOL", "NitroQuotePipeline", "run_nitro_tool"]

"""Foundation - core building blocks for wismo.

Contains: tool abstractions, error handling, registry, testing fakes, config.
Import from the subpackages directly; this module re-exports nothing so the
envelope and gateway layers can depend on ``foundation.errors`` without
pulling in the tool layer.
"""

"""Code generation orchestrator.

Components, leaf-first:

- PromptBuilder: builds system and user messages
- ContextGatherer: resolves reference file, website and web search context
- ProviderClient: one OpenAI compatible chat completion provider
- ProviderRouter: tries provider candidates in order, falls back offline
- ResponseExtractor: extracts code from free-form model reply
- CodeGenerator: the `generate()` entry point wiring all of them together
"""

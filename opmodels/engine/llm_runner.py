"""Thin wrapper around the llm Python API."""

import logging
from typing import Optional

import llm

from .context import InvocationContext
from .streaming import StreamHandler

logger = logging.getLogger(__name__)

def llm_model_id(context: InvocationContext) -> Optional[str]:
    """The ``llm`` model id to call for this context.

    A resolved model wins; otherwise the invoker's own default is used.
    None means llm's configured default model.
    """
    if context.model is not None:
        return context.model.metadata.get("llm_id", context.model.model_name)
    return context.default_model

def get_llm_model(context: InvocationContext) -> llm.Model:
    """Look up the ``llm`` model for this context.

    Descriptors from a catalog file carry no ``llm_id``. For those the bare
    model name is tried first, then the full ``provider/model`` identifier,
    since some plugins register prefixed ids.

    Raises:
        llm.UnknownModelError: If no candidate id is registered with llm
    """
    model_id = llm_model_id(context)
    logger.debug("Invoking llm model %s", model_id or "(llm default)")
    if not model_id:
        return llm.get_model()
    try:
        return llm.get_model(model_id)
    except llm.UnknownModelError:
        descriptor = context.model
        if descriptor is None or "llm_id" in descriptor.metadata:
            raise
        logger.debug("llm has no model %s, trying %s", model_id, descriptor.identifier)
        return llm.get_model(descriptor.identifier)

def run_llm(
    prompt: str,
    context: InvocationContext,
    handler: Optional[StreamHandler] = None,
) -> str:
    """Run a prompt against the model chosen for this context.

    Args:
        prompt: The prompt to send to the LLM
        context: Effective context from ``with_model``/``prepare_context``
        handler: Optional handler receiving chunks when streaming

    Returns:
        The LLM's response as a string
    """
    model = get_llm_model(context)
    response = model.prompt(prompt, system=context.system, **dict(context.options))
    if context.stream:
        handler = handler or StreamHandler(stream=True)
        text = handler.consume(response)
        handler.write("\n")
        return text.strip()
    return response.text().strip()

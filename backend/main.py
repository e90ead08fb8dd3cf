import json
import logging
from datetime import date

from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse, Response

import config
from errors import AssistantError, ConfigurationError, InvalidRequest
from gemini import GeminiClient
from normalizer import normalize_response
from prompt_builder import build_prompt, build_turns, parse_request

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)

app = FastAPI()

# Sent on every response, errors included
CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
}


@app.exception_handler(AssistantError)
async def assistant_error_handler(_request: Request, exc: AssistantError) -> JSONResponse:
    logger.error(f"Function error: {exc}")
    return JSONResponse(
        status_code=500,
        content={"error": exc.message, "details": exc.details},
        headers=CORS_HEADERS,
    )


@app.exception_handler(Exception)
async def unexpected_error_handler(_request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unexpected error: {type(exc).__name__}")
    return JSONResponse(
        status_code=500,
        content={"error": AssistantError.default_message, "details": type(exc).__name__},
        headers=CORS_HEADERS,
    )


def get_completion_client() -> GeminiClient:
    """Build the Gemini client per request; the key is read from the environment each time."""
    api_key = config.get_gemini_api_key()
    if not api_key:
        logger.error("GEMINI_API_KEY not found in environment")
        raise ConfigurationError(details="GEMINI_API_KEY environment variable is not set")
    return GeminiClient(api_key=api_key)


@app.options("/ai-assistant")
def preflight() -> Response:
    return Response(status_code=200, headers=CORS_HEADERS)


@app.post("/ai-assistant")
async def ai_assistant(request: Request, client: GeminiClient = Depends(get_completion_client)) -> JSONResponse:
    """Build a prompt for the requested action, call Gemini once and shape the reply."""
    try:
        payload = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise InvalidRequest("Request body must be valid JSON", f"Body is not JSON: {e}") from e

    generation_request = parse_request(payload)
    logger.info(
        f"Received request: action={generation_request.action.value} "
        f"message_length={len(generation_request.message)} "
        f"has_context={generation_request.project_context is not None} "
        f"history_turns={len(generation_request.conversation_history)}"
    )

    today = date.today()
    prompt = build_prompt(generation_request, today)
    completion = await client.complete(build_turns(generation_request, prompt))
    result = normalize_response(completion.text, prompt.action, today)

    return JSONResponse(
        content=result.model_dump(mode="json", by_alias=True, exclude_none=True),
        headers=CORS_HEADERS,
    )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)

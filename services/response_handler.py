from typing import Any, Dict, Tuple


class ResponseHandler:
    """
    Shapes the gateway's HTTP answers: the remote result passes through
    untouched, failures become a single {"error": message} object.
    """

    def build_response(self, result: Any) -> Tuple[Any, int]:
        return result, 200

    def build_error_response(self, error_message: str, status_code: int) -> Tuple[Dict[str, str], int]:
        return {"error": error_message}, status_code

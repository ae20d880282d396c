import unittest

from desuitemgr.errors.exceptions import (
    REJECTION,
    TRANSPORT,
    DesuiteError,
    HttpErrorInfo,
    NetworkError,
    ServerError,
    TransportError,
    classify_http_error,
    map_http_error,
    rejection_message,
)


class TestExceptions(unittest.TestCase):
    def test_base_error_keeps_details_and_cause(self) -> None:
        cause = RuntimeError("root")
        err = DesuiteError("msg", details={"k": "v"}, cause=cause)
        self.assertEqual(str(err), "msg")
        self.assertEqual(err.details["k"], "v")
        self.assertIs(err.cause, cause)

    def test_classify_4xx_is_rejection(self) -> None:
        for code in (400, 401, 403, 404, 409, 413):
            self.assertEqual(classify_http_error(HttpErrorInfo(status_code=code)), REJECTION)

    def test_classify_timeouts_and_5xx_are_transport(self) -> None:
        for code in (408, 429, 500, 502, 503, 302):
            self.assertEqual(classify_http_error(HttpErrorInfo(status_code=code)), TRANSPORT)

    def test_rejection_message(self) -> None:
        self.assertEqual(
            rejection_message(HttpErrorInfo(status_code=400, message="Title required")),
            "Title required",
        )
        self.assertEqual(rejection_message(HttpErrorInfo(status_code=404)), "not found")
        self.assertIn("409", rejection_message(HttpErrorInfo(status_code=409)))

    def test_map_http_error(self) -> None:
        err = map_http_error(HttpErrorInfo(status_code=429, message="rate"))
        self.assertIsInstance(err, NetworkError)

        err = map_http_error(HttpErrorInfo(status_code=503, message="unavail"))
        self.assertIsInstance(err, ServerError)
        self.assertIsInstance(err, TransportError)
        self.assertEqual(err.details["status_code"], 503)

    def test_map_http_error_default_message_and_cause(self) -> None:
        cause = ValueError("boom")
        err = map_http_error(
            HttpErrorInfo(status_code=500, details={"path": "notes"}), cause=cause
        )
        self.assertEqual(str(err), "HTTP error 500")
        self.assertEqual(err.details["path"], "notes")
        self.assertIs(err.cause, cause)


if __name__ == "__main__":
    unittest.main()

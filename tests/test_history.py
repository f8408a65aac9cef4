"""
Unit tests for ResponseHistory component
"""
import threading
import uuid

import pytest

from restaurant_nlu.core.history import ResponseHistory
from restaurant_nlu.models.response import Response


def _response(text="Hello"):
    return Response(predicted_label="Greeting", text=text, response_type="Greeting", confidence=0.9)


class TestResponseHistory:
    """Bounded response store"""

    def test_add_and_get(self):
        history = ResponseHistory()
        response = _response()

        assert history.add(response) is True
        assert history.get(response.id) is response
        assert response.id in history
        assert len(history) == 1

    def test_duplicate_id_rejected(self):
        history = ResponseHistory()
        response = _response()
        history.add(response)

        assert history.add(response.model_copy(update={"text": "changed"})) is False
        assert history.get(response.id).text == "Hello"

    def test_unknown_id(self):
        assert ResponseHistory().get(uuid.uuid4()) is None

    def test_oldest_evicted_at_capacity(self):
        history = ResponseHistory(capacity=2)
        first, second, third = _response("1"), _response("2"), _response("3")

        for response in (first, second, third):
            history.add(response)

        assert len(history) == 2
        assert first.id not in history
        assert [response.text for response in history.recent()] == ["2", "3"]

    def test_recent_limit(self):
        history = ResponseHistory()
        for index in range(5):
            history.add(_response(str(index)))

        assert [response.text for response in history.recent(2)] == ["3", "4"]

    def test_invalid_capacity(self):
        with pytest.raises(ValueError):
            ResponseHistory(capacity=0)

    def test_concurrent_adds(self):
        history = ResponseHistory(capacity=1000)

        def worker():
            for _ in range(50):
                history.add(_response())

        threads = [threading.Thread(target=worker) for _ in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(history) == 200

    def test_recent_zero_is_empty(self):
        history = ResponseHistory()
        history.add(_response())

        assert history.recent(0) == []

from unittest.mock import Mock


def mock_cases(sum_type, result=None):
    """
    A `Mock` handler per kind of `sum_type`, each returning `result`
    """
    return {kind: Mock(return_value=result) for kind in sum_type.kinds()}


def called(cases):
    return [kind for kind, handler in cases.items() if handler.called]

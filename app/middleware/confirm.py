"""
Confirmation guard for irreversible actions
"""
from flask import request
from utils import parse_bool


def is_confirmed():
    """`confirm` may come in the query string or the JSON body"""
    if parse_bool(request.args.get('confirm')):
        return True
    body = request.get_json(silent=True)
    if isinstance(body, dict):
        return parse_bool(body.get('confirm'))
    return False

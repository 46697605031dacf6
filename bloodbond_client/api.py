# bloodbond_client/api.py
"""
HTTP client for the BloodBond REST API
"""
import logging

import requests

from .session import SessionStore

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 25


class ApiError(Exception):
    def __init__(self, status_code, message, errors=None):
        super().__init__(f"HTTP {status_code}: {message}")
        self.status_code = status_code
        self.message = message
        self.errors = errors or []


def _safe_json(resp):
    try:
        return resp.json()
    except ValueError:
        txt = (resp.text or "")[:600]
        raise ApiError(resp.status_code, f"Non-JSON response. Body: {txt}")


class BloodBondClient:
    def __init__(self, base_url, session_store=None, timeout=DEFAULT_TIMEOUT, http=None):
        self.base_url = base_url.rstrip('/')
        self.session_store = session_store if session_store is not None else SessionStore()
        self.timeout = timeout
        self.http = http or requests.Session()
        if self.session_store.token is None:
            self.session_store.load()

    # ----------------------------------------
    # Transport
    # ----------------------------------------
    def _request(self, method, path, auth=True, **kwargs):
        headers = kwargs.pop('headers', {})
        token = self.session_store.token
        if auth and token:
            headers['Authorization'] = f"Bearer {token}"

        url = f"{self.base_url}/api/{path.lstrip('/')}"
        resp = self.http.request(method, url, headers=headers, timeout=self.timeout, **kwargs)
        data = _safe_json(resp)

        if resp.status_code >= 400:
            message = data.get('message') if isinstance(data, dict) else None
            errors = data.get('errors') if isinstance(data, dict) else None
            logger.debug("%s %s failed with %s: %s", method, url, resp.status_code, message)
            raise ApiError(resp.status_code, message or resp.reason, errors)
        return data

    # ----------------------------------------
    # Auth
    # ----------------------------------------
    def signup(self, email, password, full_name, **extra):
        body = self._request('POST', 'auth/signup', auth=False,
                             json={'email': email, 'password': password, 'fullName': full_name, **extra})
        self.session_store.save(body['token'], body['user'])
        return body

    def signin(self, email, password):
        body = self._request('POST', 'auth/signin', auth=False, json={'email': email, 'password': password})
        self.session_store.save(body['token'], body['user'])
        return body

    def signout(self):
        self.session_store.clear()

    def me(self):
        return self._request('GET', 'auth/me')

    def get_profile(self):
        return self._request('GET', 'users/profile')

    def update_profile(self, **fields):
        return self._request('PUT', 'users/profile', json=fields)

    # ----------------------------------------
    # Donors
    # ----------------------------------------
    def register_donor(self, **fields):
        return self._request('POST', 'donors/register', json=fields)

    def find_donors(self, blood_type, pincode=None):
        params = {'bloodType': blood_type}
        if pincode:
            params['pincode'] = pincode
        return self._request('GET', 'donors/find', auth=False, params=params)

    def check_eligibility(self, account_id):
        return self._request('GET', f'donors/eligibility/{account_id}')

    def cancel_donor(self, account_id):
        return self._request('DELETE', f'donors/cancel/{account_id}')

    # ----------------------------------------
    # Blood requests
    # ----------------------------------------
    def create_blood_request(self, **fields):
        return self._request('POST', 'blood-requests', json=fields)

    def user_blood_requests(self, account_id):
        return self._request('GET', f'blood-requests/user/{account_id}')

    def get_blood_request(self, request_id):
        return self._request('GET', f'blood-requests/{request_id}')

    def update_request_status(self, request_id, status):
        return self._request('PUT', f'blood-requests/{request_id}/status', json={'status': status})

    def delete_blood_request(self, request_id):
        return self._request('DELETE', f'blood-requests/{request_id}')

    def request_matches(self, request_id):
        return self._request('GET', f'blood-requests/{request_id}/matches')

    # ----------------------------------------
    # Donations
    # ----------------------------------------
    def record_donation(self, **fields):
        return self._request('POST', 'donations', json=fields)

    def donation_history(self, account_id):
        return self._request('GET', f'donations/user/{account_id}')

    # ----------------------------------------
    # Blood camps
    # ----------------------------------------
    def list_camps(self, state=None, district=None):
        params = {k: v for k, v in (('state', state), ('district', district)) if v}
        return self._request('GET', 'blood-camps', auth=False, params=params)

    def get_camp(self, camp_id):
        return self._request('GET', f'blood-camps/{camp_id}', auth=False)

    def create_camp(self, **fields):
        return self._request('POST', 'blood-camps', json=fields)

    def update_camp(self, camp_id, **fields):
        return self._request('PUT', f'blood-camps/{camp_id}', json=fields)

    def delete_camp(self, camp_id):
        return self._request('DELETE', f'blood-camps/{camp_id}')

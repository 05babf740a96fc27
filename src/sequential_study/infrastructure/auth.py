"""Mock authentication for local development.

The study page only needs an ID token to call the backend.  Locally that
token comes from :class:`MockTokenProvider`, and the browser receives an ES
module generated by :func:`render_mock_auth_module` in place of the real
auth client.
"""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, field
from typing import Protocol, runtime_checkable

logger = logging.getLogger(__name__)

MOCK_TOKEN = "mock-token"
AUTH_STATE_DELAY_MS = 100


@runtime_checkable
class TokenProvider(Protocol):
    """Anything that can hand out an ID token for the current user."""

    def get_token(self) -> str: ...


@dataclass(frozen=True)
class MockUser:
    uid: str = "test-user"
    email: str = "test@example.com"
    display_name: str = "Test User"

    def to_dict(self) -> dict[str, str]:
        return asdict(self)


@dataclass
class MockTokenProvider:
    """Always signed in as :class:`MockUser`; every token is ``mock-token``."""

    user: MockUser = field(default_factory=MockUser)
    token: str = MOCK_TOKEN

    def get_token(self) -> str:
        logger.debug("Issuing mock token for %s", self.user.uid)
        return self.token


_MODULE_TEMPLATE = """\
// Mock auth module for local development.
export const API_BASE = {api_base};

export const auth = {{
  currentUser: {{
    uid: {uid},
    email: {email},
    displayName: {display_name},
    getIdToken: async () => {token},
  }},
}};

export function onAuthStateChanged(authInstance, callback) {{
  setTimeout(() => callback(auth.currentUser), {delay_ms});
  return () => {{}};
}}

export async function signOut() {{
  console.log('Mock SignOut');
}}

export async function updateProfile() {{}}
export async function updateEmail() {{}}
export async function updatePassword() {{}}
export async function deleteUser() {{}}
"""


def render_mock_auth_module(
    provider: MockTokenProvider | None = None,
    api_base: str = "http://localhost:3000",
) -> str:
    """Return the JavaScript served at ``/backend/js/auth.js``.

    String values are JSON-encoded so they are valid JS literals.
    """
    provider = provider or MockTokenProvider()
    user = provider.user
    return _MODULE_TEMPLATE.format(
        api_base=json.dumps(api_base),
        uid=json.dumps(user.uid),
        email=json.dumps(user.email),
        display_name=json.dumps(user.display_name),
        token=json.dumps(provider.get_token()),
        delay_ms=AUTH_STATE_DELAY_MS,
    )

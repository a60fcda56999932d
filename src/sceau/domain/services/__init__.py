"""
Domain services: interfaces and the pure message composer.
"""

from sceau.domain.services import message_composer
from sceau.domain.services.i_address_validator import IAddressValidator
from sceau.domain.services.i_challenge_store import IChallengeStore
from sceau.domain.services.i_session_token_codec import ISessionTokenCodec
from sceau.domain.services.i_signature_scheme import ISignatureScheme
from sceau.domain.services.i_token_denylist import ITokenDenylist

__all__ = [
    "message_composer",
    "IAddressValidator",
    "IChallengeStore",
    "ISessionTokenCodec",
    "ISignatureScheme",
    "ITokenDenylist",
]

from collections.abc import Iterable
from pathlib import Path
import json
import copy
import logging
from functools import wraps

import google.auth
import google.auth.exceptions
from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from google.oauth2 import service_account
from google_auth_oauthlib.flow import InstalledAppFlow
from googleapiclient.discovery import build, Resource
import googleapiclient.discovery_cache as gws_discovery_cache

logger = logging.getLogger(__name__)

_SCOPES = {
    "sheets": "https://www.googleapis.com/auth/spreadsheets",
    "sheets-ro": "https://www.googleapis.com/auth/spreadsheets.readonly",
    "drive-file": "https://www.googleapis.com/auth/drive.file",
    "drive": "https://www.googleapis.com/auth/drive",
    "drive-ro": "https://www.googleapis.com/auth/drive.readonly",
}
_SCOPE_URL_PREFIX = "https://www.googleapis.com/"

def get_scope(scope: str) -> str:
    """
    Get a scope based on simplified label.
    A raw URL will also be accepted, anything else comes back empty.
    """
    s = str(scope)
    sc = _SCOPES.get(s, "")
    if not sc and s.startswith(_SCOPE_URL_PREFIX):
        sc = s
    return sc

def scope_list(value: None|str|Iterable[str]) -> list[str]:
    """Normalize a label, URL or list of either into a list of scope URLs."""
    if value is None:
        return []
    items = [value] if isinstance(value, str) or not isinstance(value, Iterable) else value
    slist = []
    for v in items:
        s = get_scope(str(v))
        if s and s not in slist:
            slist.append(s)
    return slist

def service_account_credentials(info: str|dict|Path,
                                subject: str|None = None,
                                scopes: None|str|Iterable[str] = "sheets") -> service_account.Credentials:
    """
    Build service account credentials from the JSON key Google hands out.
    info can be the JSON text itself, the parsed dict or a path to the key file.
    subject is the account to act as, for domain wide delegation this is the
    user and for a plain service account it is the account's own email.
    """
    if isinstance(info, Path) or (isinstance(info, str) and not info.lstrip().startswith('{')):
        with open(Path(info).resolve(), 'r', encoding='utf-8') as f:
            info = json.load(f)
    elif isinstance(info, str):
        info = json.loads(info)
    creds = service_account.Credentials.from_service_account_info(dict(info), scopes=scope_list(scopes))
    if subject:
        creds = creds.with_subject(subject)
    return creds

def build_service(name: str, version: str, credentials, developer_key: str|None = None) -> Resource:
    """Build a discovery client for the given credentials."""
    logger.debug("building %s:%s service", name, version)
    return build(name, version, credentials=credentials,
                 developerKey=developer_key, cache=gws_discovery_cache.autodetect())

class __GWSAccess():
    """
    Class encapsulating authenticated access to Google Workspace
    See https://developers.google.com/workspace/guides/create-credentials#choose_the_access_credential_that_is_right_for_you
    for an overview of what you'll need.  Once you've obtained a secrets file you can refer the object to it
    for authentication.  For OAuth it will trigger the confirmation screens.  Sessions will be preserved
    and refreshed so confirmation does not need to happen repeatedly.
    A service account key can be used instead via use_service_account(), no browser needed.

    It makes no sense to have multiple authenticated sessions per application so do this as a module singleton.
    Anything wanting its own credentials (SheetHelper.init() for example) builds its own service instead.
    """

    __DEFAULT_AUTH_PROMPT_MSG = "Please visit this URL to authorize this application: {url}"
    __DEFAULT_AUTH_FLOW_SUCCESS_MSG = "The authentication flow has completed. You may close this window."
    __DEFAULT_SECRETS = (Path.home() / "gws_client_secrets.json").absolute()
    __DEFAULT_CACHE = (Path.home() / "gws_tokens.json").absolute()

    def __init__(self) -> None:
        self.reset()

    def __bool__(self) -> bool:
        """True is we are connected and authenticated"""
        return self.connected

    def __str__(self) -> str:
        if self.connected:
            return f"Connected:{str(self.session_scopes)}"
        return f"Disconnected:{str(self.__scopes)}"

    def __repr__(self) -> str:
        return f"{str(self.__class__)}:{str(self)}"

    @property
    def client_secrets(self) -> Path:
        """
        Path to client secrets file as provided by Google when generating access credentials.
        """
        return self.__secrets

    @client_secrets.setter
    def client_secrets(self, value: Path|str) -> None:
        val = value if isinstance(value, Path) else Path(str(value))
        if val != self.__secrets:
            self.__secrets = val
            if self.connected:
                self.connect()

    @property
    def cred_cache(self) -> Path:
        """
        Path to local credential cache to not have to do full authentication each time.
        """
        return self.__cache

    @cred_cache.setter
    def cred_cache(self, value: Path|str):
        val = value if isinstance(value, Path) else Path(str(value))
        if val != self.__cache:
            self.__cache = val
            if self.connected:
                self.connect()

    @property
    def connected(self) -> bool:
        """
        Are we authenticated with Google?
        """
        return bool(self.__creds) and bool(self.__creds.valid)

    @property
    def session_scopes(self) -> list[str]:
        """
        Scopes authenticated by Google for this session.
        This differs to self.scopes as that is what is requested or to be requested.
        """
        if self.connected:
            return list(self.__creds.scopes or [])
        return []

    @property
    def scopes(self) -> list[str]:
        """
        The scopes requested or to be requested on next authentication sequence.
        """
        return self.__scopes

    @scopes.setter
    def scopes(self, value: None|list[str]|str) -> None:
        self.__scopes = scope_list(value)
        if self.__scopes and self.connected:
            self.refresh()
        else:
            self.__creds = None
            self.__services = {}

    def append_scopes(self, *args) -> bool:
        """
        Adding to the current scope list.
        """
        for a in args:
            for s in scope_list(a):
                if s not in self.__scopes:
                    self.__scopes.append(s)
        return self.refresh()

    @property
    def creds(self):
        """
        Current active access credentials or None
        """
        return self.__creds

    @property
    def config(self) -> dict:
        """
        Get all configuration state as a dict.
        Convenience for getting it all at once for pushing into a json, toml, ini, etc, file.
        """
        return {
            'secrets': str(self.__secrets),
            'cache': str(self.__cache),
            'scopes': list(self.__scopes),
            'server': self.auth_server,
            'port': self.auth_port
        }

    @config.setter
    def config(self, config: dict) -> None:
        """
        Set configuration state from a dict.
        Convenience method for inserting state pulled from a config file or equivalent.
        """
        reconnect = False
        v = config.get('port', None)
        if v is not None:
            self.auth_port = int(v)
        v = config.get('server', None)
        if v is not None:
            self.auth_server = str(v)
        v = config.get('scopes', [])
        if v:
            self.__scopes = scope_list(v)
            reconnect = True
        v = config.get('cache', None)
        if v is not None:
            self.__cache = Path(v)
            reconnect = True
        v = config.get('secrets', None)
        if v is not None:
            self.__secrets = Path(v)
            reconnect = True
        v = config.get('auth_prompt_msg', None)
        if v is not None:
            self.auth_prompt_msg = str(v)
        v = config.get('flow_success_msg', None)
        if v is not None:
            self.auth_flow_success_msg = str(v)
        if reconnect and self.connected:
            self.connect()

    def reset(self) -> None:
        """
        Reset all connection state to defaults.
        """
        self.__secrets = self.__DEFAULT_SECRETS
        self.__cache = self.__DEFAULT_CACHE
        self.__creds = None
        self.__scopes = []
        self.__services = {}
        self.auth_server = 'localhost'
        self.auth_port = 0
        self.auth_prompt_msg = self.__DEFAULT_AUTH_PROMPT_MSG
        self.auth_flow_success_msg = self.__DEFAULT_AUTH_FLOW_SUCCESS_MSG

    def refresh(self) -> bool:
        """
        Check the current scopes and if new requested ones are not present
        in the current session_scopes, refresh the access.
        """
        scopes_accounted = all(s in self.session_scopes for s in self.__scopes)
        if self.connected and not scopes_accounted:
            return self.connect()
        return True

    def use_service_account(self, info: str|dict|Path, subject: str|None = None) -> bool:
        """
        Switch the session over to a service account key instead of the OAuth flow.
        """
        self.__services = {}
        self.__creds = service_account_credentials(info, subject, self.__scopes or "sheets")
        # service account tokens are minted on first use
        self.__creds.refresh(Request())
        return self.connected

    def connect(self) -> bool:
        """
        Establish a new authentication session.
        If successful will save the credentials in the cache file to reuse
        on subsequent invocations.
        """
        self.__creds = None
        self.__services = {}
        if not self.__scopes:
            return False
        requested_scopes = copy.copy(self.__scopes)
        if self.__cache.exists() and self.__cache.is_file():
            # the cache doesnt get checked against scopes on refresh
            # so do that here and drop it if it no longer covers the request
            cf = self.__cache.resolve()
            with open(cf, 'r', encoding='utf-8') as f:
                scopes = json.load(f).get('scopes', [])
            if not all(s in scopes for s in requested_scopes):
                self.__cache.unlink()
            else:
                self.__creds = Credentials.from_authorized_user_file(str(cf), requested_scopes)
        if not self.connected:
            if self.__creds and self.__creds.refresh_token:
                try:
                    self.__creds.refresh(Request())
                except google.auth.exceptions.RefreshError as e:
                    logger.warning("failed to refresh stored creds: %s...deleting cred cache and re-authorizing", e)
                finally:
                    if not self.connected:
                        self.__cache.unlink(missing_ok=True)

            if not self.connected:
                if self.__secrets.exists() and self.__secrets.is_file():
                    flow = InstalledAppFlow.from_client_secrets_file(str(self.__secrets), requested_scopes)
                    self.__creds = flow.run_local_server(host=self.auth_server, port=self.auth_port,
                                                         authorization_prompt_message=self.auth_prompt_msg,
                                                         success_message=self.auth_flow_success_msg)
                else:
                    # this will look at the GOOGLE_APPLICATION_CREDENTIALS envvar and
                    # other cloud default locations
                    try:
                        self.__creds, _ = google.auth.default(requested_scopes)
                        self.__creds.refresh(Request())
                    except google.auth.exceptions.DefaultCredentialsError:
                        logger.warning("no client secrets at %s and no default credentials", self.__secrets)
                        self.__creds = None
                    return self.connected

            if self.connected and isinstance(self.__creds, Credentials):
                user_info = {'refresh_token': self.__creds.refresh_token, 'client_id': self.__creds.client_id,
                             'client_secret': self.__creds.client_secret, 'scopes': requested_scopes}
                with open(self.__cache.resolve(), 'w', encoding='utf-8') as f:
                    json.dump(user_info, f, ensure_ascii=False, indent=2)
        return self.connected

    def get_service(self, name: str, version: str) -> Resource|None:
        """
        Build the requested service if not already available, connecting if required.
        Can return None if no connection present.
        """
        if not self.connected:
            self.connect()
        if not self.connected:
            return None
        id = f'{name}:{version}'
        s = self.__services.get(id, None)
        if s is None:
            s = build_service(name, version, self.__creds)
            self.__services[id] = s
        return s

gws = __GWSAccess()

def service(name: str, version: str):
    """
    Simple decorator to deliver the shared session service to a function that
    needs access to a GWS service to build a request.  An explicit service
    keyword passed by the caller wins.
    param: name: service name
    param: version: service version
    """
    def _inner_decorator(f):
        @wraps(f)
        def wrapped(*args, **kwargs):
            if kwargs.get('service') is None:
                kwargs['service'] = gws.get_service(name, version)
                if kwargs['service'] is None:
                    raise RuntimeError(f"No authenticated session available for {name}:{version}")
            return f(*args, **kwargs)
        return wrapped
    return _inner_decorator

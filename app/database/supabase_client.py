from supabase import create_client, Client, ClientOptions
from app.config import settings


class SupabaseClient:
    _client: Client = None
    _service_client: Client = None

    @classmethod
    def get_client(cls) -> Client:
        """Shared anon-key client. Only verifies tokens; never holds a session."""
        if cls._client is None:
            cls._client = create_client(settings.supabase_url, settings.supabase_key)
        return cls._client

    @classmethod
    def get_service_client(cls) -> Client:
        """Client with service_role key; bypasses RLS. Row policies are enforced by app.core.policies."""
        if not settings.supabase_service_role_key:
            raise RuntimeError("SUPABASE_SERVICE_ROLE_KEY must be configured")
        if cls._service_client is None:
            cls._service_client = create_client(
                settings.supabase_url, settings.supabase_service_role_key
            )
        return cls._service_client

    @classmethod
    def new_session_client(cls) -> Client:
        """Throwaway anon-key client for sign up / sign in.

        Signing in rewrites the client's Authorization header, so the session
        must never land on a shared client.
        """
        return create_client(
            settings.supabase_url,
            settings.supabase_key,
            options=ClientOptions(persist_session=False, auto_refresh_token=False),
        )

    @classmethod
    def reset_client(cls):
        cls._client = None
        cls._service_client = None


def get_supabase() -> Client:
    return SupabaseClient.get_service_client()


def get_auth_client() -> Client:
    """Anon-key client used for token verification."""
    return SupabaseClient.get_client()


def get_session_client() -> Client:
    """Per-request client for sign up / sign in."""
    return SupabaseClient.new_session_client()

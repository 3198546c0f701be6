"""Session context passed explicitly to every API call."""

import threading

from brale_dashboard.core.models import DashboardView


class Session:
    """
    Holds the current bearer token and sequences dashboard activations.

    Every dashboard load takes a new activation number. A view is only
    published when its activation is still the latest one, so results of a
    load that was superseded (e.g. by a token change) are discarded.

    Parameters
    ----------
    token : str | None
        Bearer token used for resource calls

    """

    def __init__(self, token: str | None = None) -> None:
        self._token = token
        self._activation = 0
        self._lock = threading.Lock()
        self.account_id: str | None = None
        self.view: DashboardView | None = None

    @property
    def token(self) -> str | None:
        """Current bearer token."""
        return self._token

    @property
    def activation(self) -> int:
        """Number of the latest activation."""
        return self._activation

    def set_token(self, token: str | None) -> None:
        """
        Replace the token and supersede any running activation.

        Parameters
        ----------
        token : str | None
            New bearer token

        """
        with self._lock:
            self._token = token
            self._activation += 1
            self.account_id = None
            self.view = None

    def begin_activation(self) -> int:
        """
        Start a new activation.

        Returns
        -------
        int
            Activation number to pass back to ``publish``

        """
        with self._lock:
            self._activation += 1
            return self._activation

    def is_current(self, activation: int) -> bool:
        """Whether ``activation`` is still the latest activation."""
        return activation == self._activation

    def publish(self, view: DashboardView) -> bool:
        """
        Store a view if it belongs to the latest activation.

        Parameters
        ----------
        view : DashboardView
            View produced by a dashboard load

        Returns
        -------
        bool
            True if the view was stored, False if it was stale

        """
        with self._lock:
            if view.activation != self._activation:
                return False
            self.view = view
            self.account_id = view.account_id
            return True

    def auth_headers(self) -> dict[str, str]:
        """Headers for bearer-authenticated resource calls."""
        return {
            "Authorization": f"Bearer {self._token}",
            "Content-Type": "application/json",
        }

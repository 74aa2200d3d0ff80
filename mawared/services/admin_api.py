import logging
from typing import Any, Callable, Dict, List, Optional

import requests

from mawared.core.config import settings
from mawared.core.exceptions import AdminApiError

logger = logging.getLogger(__name__)


class AdminApiClient:
    """
    JSON-over-HTTP client for the administrative API.

    Every call carries the current session's bearer token. Non-2xx
    responses are expected to carry ``{"error": "..."}``, which becomes the
    AdminApiError message.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        token_provider: Optional[Callable[[], Optional[str]]] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = (base_url if base_url is not None else settings.admin_api_base_url).rstrip("/")
        self.token_provider = token_provider or (lambda: settings.baas.access_token)
        self.timeout = timeout if timeout is not None else settings.http_timeout_seconds
        self.session = session or requests.Session()

    def _call(self, method: str, endpoint: str, body: Optional[Dict[str, Any]] = None) -> Any:
        token = self.token_provider() or ""
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {token}",
        }
        try:
            response = self.session.request(
                method,
                f"{self.base_url}{endpoint}",
                json=body,
                headers=headers,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error(f"Admin API call failed: {method} {endpoint}: {e}")
            raise AdminApiError(f"Admin API unreachable: {e}") from e

        try:
            data = response.json()
        except ValueError:
            data = {}

        if not response.ok:
            message = data.get("error") if isinstance(data, dict) else None
            logger.warning(f"Admin API {method} {endpoint} returned {response.status_code}: {message}")
            raise AdminApiError(message or "API request failed", status_code=response.status_code)

        return data

    def create_store_owner(
        self,
        email: str,
        full_name: str,
        store_name: str,
        phone: Optional[str] = None,
        store_number: Optional[str] = None,
    ):
        body = {"email": email, "fullName": full_name, "storeName": store_name}
        if phone is not None:
            body["phone"] = phone
        if store_number is not None:
            body["storeNumber"] = store_number
        return self._call("POST", "/api/admin/create-store-owner", body)

    def create_hr_member(
        self,
        email: str,
        full_name: str,
        phone: Optional[str] = None,
        store_ids: Optional[List[str]] = None,
        assigned_by: Optional[str] = None,
    ):
        body: Dict[str, Any] = {"email": email, "fullName": full_name}
        if phone is not None:
            body["phone"] = phone
        if store_ids is not None:
            body["storeIds"] = store_ids
        if assigned_by is not None:
            body["assignedBy"] = assigned_by
        return self._call("POST", "/api/admin/create-hr-member", body)

    def update_user_role(self, user_id: str, role: str):
        return self._call("POST", "/api/admin/update-user-role", {"userId": user_id, "role": role})

    def toggle_user_status(self, user_id: str, banned: bool):
        return self._call("POST", "/api/admin/toggle-user-status", {"userId": user_id, "banned": banned})

    def reset_user_password(self, user_id: str, email: str, full_name: str):
        return self._call(
            "POST",
            "/api/admin/reset-user-password",
            {"userId": user_id, "email": email, "fullName": full_name},
        )

    def create_subscription_plan(
        self,
        name: str,
        price_monthly: float,
        price_yearly: float,
        max_employees: int,
        name_ar: Optional[str] = None,
        features: Optional[List[str]] = None,
        hr_consultation_hours: Optional[int] = None,
    ):
        body: Dict[str, Any] = {
            "name": name,
            "priceMonthly": price_monthly,
            "priceYearly": price_yearly,
            "maxEmployees": max_employees,
        }
        if name_ar is not None:
            body["nameAr"] = name_ar
        if features is not None:
            body["features"] = features
        if hr_consultation_hours is not None:
            body["hrConsultationHours"] = hr_consultation_hours
        return self._call("POST", "/api/admin/subscription-plans", body)

    def update_subscription_plan(self, plan_id: str, params: Dict[str, Any]):
        return self._call("PUT", f"/api/admin/subscription-plans/{plan_id}", params)

    def get_system_settings(self):
        return self._call("GET", "/api/admin/system-settings")

    def save_system_settings(self, system_settings: Dict[str, Any]):
        return self._call("POST", "/api/admin/save-system-settings", {"settings": system_settings})

    def assign_hr_to_store(self, hr_member_id: str, store_id: str, assigned_by: str):
        return self._call(
            "POST",
            "/api/admin/assign-hr-to-store",
            {"hrMemberId": hr_member_id, "storeId": store_id, "assignedBy": assigned_by},
        )

    def unassign_hr_from_store(self, hr_member_id: str, store_id: str):
        return self._call(
            "DELETE",
            "/api/admin/unassign-hr-from-store",
            {"hrMemberId": hr_member_id, "storeId": store_id},
        )

    def check_health(self):
        return self._call("GET", "/api/health")

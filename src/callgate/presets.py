# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Subject-protection rule table for the platform core service process.

Grants the subject clipboard access, hides the clipboard access
notification about it, and keeps lifecycle management from stopping,
killing or freezing it.
"""

from __future__ import annotations

from callgate.intercept.actions import SubstitutionAction
from callgate.intercept.matchers import AnyTextContains, AnyTextEquals, FirstTextEquals
from callgate.intercept.rule import HookRule

DEFAULT_HOST_PROCESS = "android"
DEFAULT_SUBJECT = "com.clipboardsync"

CLIPBOARD_SERVICE = "com.android.server.clipboard.ClipboardService"
ACTIVITY_MANAGER_SERVICE = "com.android.server.am.ActivityManagerService"
PROCESS_LIST = "com.android.server.am.ProcessList"
# Only present on builds with the cached-app freezer (Android 11+).
CACHED_APP_OPTIMIZER = "com.android.server.am.CachedAppOptimizer"


def subject_protection_rules(subject: str = DEFAULT_SUBJECT) -> list[HookRule]:
    """Return the protection rules for *subject*, in installation order."""
    is_subject = AnyTextEquals(subject)
    mentions_subject = AnyTextContains(subject)
    return [
        HookRule(CLIPBOARD_SERVICE, "clipboardAccessAllowed", FirstTextEquals(subject), SubstitutionAction.RETURN_TRUE),
        HookRule(CLIPBOARD_SERVICE, "showAccessNotificationLocked", is_subject, SubstitutionAction.RETURN_NONE),
        HookRule(ACTIVITY_MANAGER_SERVICE, "forceStopPackage", is_subject, SubstitutionAction.RETURN_NONE),
        HookRule(ACTIVITY_MANAGER_SERVICE, "killBackgroundProcesses", is_subject, SubstitutionAction.RETURN_NONE),
        HookRule(PROCESS_LIST, "killPackageProcessesLocked", is_subject, SubstitutionAction.RETURN_FALSE),
        # Process records are opaque objects; match on their text form.
        HookRule(CACHED_APP_OPTIMIZER, "freezeAppAsyncLSP", mentions_subject, SubstitutionAction.RETURN_NONE),
        HookRule(CACHED_APP_OPTIMIZER, "freezeAppAsyncInternalLSP", mentions_subject, SubstitutionAction.RETURN_NONE),
    ]

"""Utility script to manage gateway groups, credentials and bearer tokens."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
SRC_DIR = ROOT / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.append(str(SRC_DIR))

from gateway_api.auth.service import create_access_token
from gateway_api.db.migrations import upgrade_database
from gateway_api.service.errors import GatewayServiceError
from gateway_api.service.facade import gateway_services


def issue_token(args: argparse.Namespace) -> None:
    roles = [role.strip() for role in args.roles.split(",") if role.strip()]
    token, expires_in = create_access_token(args.subject, roles)
    print(token)
    print(f"Expires in {expires_in}s", file=sys.stderr)


def add_member(args: argparse.Namespace) -> None:
    member = gateway_services.groups.add_member(args.gateway, args.group, args.user, actor_id="cli")
    print(f"Added '{member}' to group '{args.group}'")


def remove_member(args: argparse.Namespace) -> None:
    gateway_services.groups.remove_member(args.gateway, args.group, args.user, actor_id="cli")
    print(f"Removed '{args.user}' from group '{args.group}'")


def create_credential(args: argparse.Namespace) -> None:
    public_key = Path(args.public_key_file).read_text(encoding="utf-8") if args.public_key_file else None
    stored = gateway_services.credentials.create_credential(
        gateway_id=args.gateway,
        owner_id=args.owner,
        name=args.name,
        credential_type=args.type,
        description=args.description,
        public_key=public_key,
        actor_id="cli",
    )
    print(f"Stored credential {stored.token} for '{stored.owner_id}'")


def grant(args: argparse.Namespace) -> None:
    stored = gateway_services.access_grants.create_access_grant(
        resource_type=args.resource_type,
        resource_id=args.resource,
        owner_id=args.owner,
        owner_type=args.owner_type,
        gateway_id=args.gateway,
        credential_token=args.credential,
        login_username=args.login_username,
        actor_id="cli",
    )
    print(f"Created access grant {stored.grant_id}")


def list_access(args: argparse.Namespace) -> None:
    entries = gateway_services.access_control.get_access_control(args.gateway, args.user)
    if not entries:
        print("No credentials.")
        return
    for entry in entries:
        resources = ", ".join(binding.resource_id for binding in entry.compute_resources + entry.storage_resources)
        print(f"{entry.token} [{entry.ownership.value}/{entry.source.value}:{entry.source_id}] {entry.name or '-'} -> {resources or '-'}")


def audit_log(args: argparse.Namespace) -> None:
    events = gateway_services.audit.list_events(args.target_type, args.target_id, action=args.action, limit=args.limit)
    for event in events:
        print(f"{event.created_at.isoformat()} {event.actor_id or '-'} {event.action} {event.target_id or '-'} {event.metadata or ''}")


def main() -> None:
    parser = argparse.ArgumentParser(description="Manage gateway groups, credentials and access grants")
    sub = parser.add_subparsers(dest="command", required=True)

    token = sub.add_parser("issue-token", help="Print a signed bearer token")
    token.add_argument("subject")
    token.add_argument("--roles", default="gateway.member")
    token.set_defaults(func=issue_token, needs_db=False)

    add = sub.add_parser("add-member", help="Add a user to a group")
    add.add_argument("gateway")
    add.add_argument("group")
    add.add_argument("user")
    add.set_defaults(func=add_member)

    remove = sub.add_parser("remove-member", help="Remove a user from a group")
    remove.add_argument("gateway")
    remove.add_argument("group")
    remove.add_argument("user")
    remove.set_defaults(func=remove_member)

    credential = sub.add_parser("create-credential", help="Store a credential in the catalog")
    credential.add_argument("gateway")
    credential.add_argument("owner", help="User id or the gateway id for gateway-owned credentials")
    credential.add_argument("name")
    credential.add_argument("--type", default="SSH", choices=["SSH", "PASSWORD", "CERTIFICATE"])
    credential.add_argument("--description")
    credential.add_argument("--public-key-file")
    credential.set_defaults(func=create_credential)

    grant_cmd = sub.add_parser("grant", help="Bind a credential to a resource")
    grant_cmd.add_argument("gateway")
    grant_cmd.add_argument("resource_type", choices=["COMPUTE", "STORAGE"])
    grant_cmd.add_argument("resource")
    grant_cmd.add_argument("owner_type", choices=["GATEWAY", "GROUP", "USER"])
    grant_cmd.add_argument("owner")
    grant_cmd.add_argument("credential")
    grant_cmd.add_argument("--login-username")
    grant_cmd.set_defaults(func=grant)

    access = sub.add_parser("list-access", help="Show the credentials a user can use")
    access.add_argument("gateway")
    access.add_argument("user")
    access.set_defaults(func=list_access)

    audit = sub.add_parser("audit-log", help="Show recent changes to grants, preferences, credentials or groups")
    audit.add_argument("target_type", choices=["access_grant", "preference", "credential", "group"])
    audit.add_argument("target_id", nargs="?")
    audit.add_argument("--action")
    audit.add_argument("--limit", type=int, default=50)
    audit.set_defaults(func=audit_log)

    args = parser.parse_args()
    if getattr(args, "needs_db", True):
        upgrade_database()
    try:
        args.func(args)
    except GatewayServiceError as exc:
        print(exc.message, file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()

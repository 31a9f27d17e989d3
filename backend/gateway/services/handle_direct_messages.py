"""Direct Message Handlers — send, delete, and read the mail boxes.

Invariants:
    - Every box answer is {"direct_message": [...]} under <direct-messages>
    - A message is "received" when read from the inbox or when its from_url is
      not the viewer's own profile URL: sender = the contact, recipient = self.
      Otherwise sender = self
    - friendica_verbose=true swaps empty results and destroy errors for a
      {"result": {"result", "message"}} answer instead of an exception
    - new: missing text, or neither screen_name nor user_id, answers nothing
      (500); a known recipient outside the viewer's contacts answers
      {"direct_message": {"error": -1}}

Design Decisions:
    - One box handler parametrised by MailBox; the four routes are thin
      partial-style wrappers so the routing table stays explicit
    - destroy without verbose returns the deleted message rather than an
      empty body
"""

import logging
from uuid import uuid4

from gateway.core.domain_types import MailBox, Scope, Viewer
from gateway.core.entity_shapes import message_object, verbose_answer
from gateway.core.errors import BadRequestError, NotFoundError
from gateway.core.identity_rules import best_by_network
from gateway.core.repository_protocols import (
    ContactLike, MailLike, MailQuery, NewMail,
)
from gateway.core.request_context import ApiResponse, RequestContext
from gateway.services.gateway_services import GatewayServices
from gateway.services.user_views import contact_view, self_view

logger = logging.getLogger(__name__)

ROOT_ELEMENT = "direct-messages"
_TEXT_MODES = ("html", "plain")


def _text_mode(ctx: RequestContext) -> str | None:
    mode = ctx.param("getText")
    return mode if mode in _TEXT_MODES else None


async def _own_contact(svc: GatewayServices, viewer: Viewer) -> ContactLike:
    own = await svc.contacts.self_contact(viewer.uid)
    if own is None:
        raise NotFoundError("User not found")
    return own


async def _render(
    svc: GatewayServices,
    ctx: RequestContext,
    mail: MailLike,
    own: ContactLike,
    me: dict,
    box: MailBox,
) -> dict:
    contact = await svc.contacts.get(mail.contact_id)
    other = await contact_view(svc, contact, ctx.viewer.uid) if contact else me
    if box is MailBox.INBOX or mail.from_url != own.url:
        sender, recipient = other, me
    else:
        sender, recipient = me, other
    return message_object(
        mail, recipient, sender, svc.markup,
        get_text=_text_mode(ctx),
        get_user_objects=ctx.bool_param("getUserObjects", True),
    )


async def direct_messages_new(svc: GatewayServices, ctx: RequestContext) -> ApiResponse | None:
    viewer = ctx.require_viewer(Scope.WRITE)
    text = ctx.param("text")
    screen_name = ctx.param("screen_name")
    user_id = ctx.int_param("user_id")
    if not text or (not screen_name and not user_id):
        return None

    if screen_name:
        recipient = best_by_network(
            await svc.contacts.owned_by_nick(viewer.uid, screen_name),
        )
        if recipient is None:
            raise NotFoundError("Recipient not found")
    else:
        public = await svc.contacts.get_public(user_id)
        if public is None:
            raise NotFoundError("Recipient not found")
        recipient = await svc.contacts.owned_by_nurl(viewer.uid, public.nurl)
        if recipient is None or recipient.is_self:
            logger.info(
                "Direct message recipient is not a contact",
                extra={"viewer_id": viewer.uid},
            )
            return ApiResponse(ROOT_ELEMENT, {"direct_message": {"error": -1}})

    reply_to = ""
    replied_id = ctx.int_param("replyto")
    if replied_id:
        replied = await svc.mails.get_owned(viewer.uid, replied_id)
        if replied is None:
            raise BadRequestError("Invalid replyto.")
        reply_to = replied.parent_uri
        title = replied.title
    else:
        title = ctx.param("title") or (f"{text[:10]}..." if len(text) > 10 else text)

    own = await _own_contact(svc, viewer)
    mail = await svc.mails.create(NewMail(
        uid=viewer.uid,
        contact_id=recipient.id,
        from_url=own.url,
        from_name=own.name,
        from_photo=own.avatar,
        title=title,
        body=text,
        uri=f"{svc.settings.base_url}/objects/{uuid4().hex}",
        reply_to=reply_to,
    ))
    if mail is None:
        return ApiResponse(ROOT_ELEMENT, {"direct_message": {"error": -1}})

    me = await self_view(svc, viewer)
    message = await _render(svc, ctx, mail, own, me, MailBox.SENTBOX)
    return ApiResponse(ROOT_ELEMENT, {"direct_message": message})


async def direct_messages_destroy(svc: GatewayServices, ctx: RequestContext) -> ApiResponse:
    viewer = ctx.require_viewer(Scope.WRITE)
    verbose = ctx.bool_param("friendica_verbose")
    mail_id = ctx.int_param("id", 0)
    parent_uri = ctx.param("friendica_parenturi", "")

    if verbose and (not mail_id or not parent_uri):
        return ApiResponse(
            "direct_messages_delete",
            verbose_answer("error", "message id or parenturi not specified"),
        )
    if not mail_id:
        raise BadRequestError("Message id not specified")

    mail = await svc.mails.get_owned(viewer.uid, mail_id, parent_uri)
    if mail is None:
        if verbose:
            return ApiResponse(
                "direct_messages_delete",
                verbose_answer("error", "message id not in database"),
            )
        raise BadRequestError("message id not in database")

    own = await _own_contact(svc, viewer)
    message = await _render(
        svc, ctx, mail, own, await self_view(svc, viewer), MailBox.ALL,
    )
    await svc.mails.delete(mail)
    logger.info("Direct message deleted", extra={"viewer_id": viewer.uid})

    if verbose:
        return ApiResponse(
            "direct_messages_delete", verbose_answer("ok", "message deleted"),
        )
    return ApiResponse(ROOT_ELEMENT, {"direct_message": message})


async def _box(
    svc: GatewayServices, ctx: RequestContext, box: MailBox,
) -> ApiResponse:
    viewer = ctx.require_viewer(Scope.READ)
    count = ctx.int_param("count", svc.settings.default_page_count)
    page = ctx.int_param("page", 1)
    own = await _own_contact(svc, viewer)

    mails = await svc.mails.select_box(viewer.uid, MailQuery(
        own_url=own.url,
        box=box,
        since_id=ctx.int_param("since_id", 0),
        max_id=ctx.int_param("max_id", 0),
        contact_id=ctx.int_param("user_id"),
        screen_name=ctx.param("screen_name"),
        parent_uri=ctx.param("uri"),
        offset=max(0, (page - 1) * count),
        limit=max(0, count),
    ))
    if not mails and ctx.bool_param("friendica_verbose"):
        return ApiResponse(ROOT_ELEMENT, verbose_answer("error", "no mails available"))

    me = await self_view(svc, viewer)
    messages = [await _render(svc, ctx, mail, own, me, box) for mail in mails]
    return ApiResponse(ROOT_ELEMENT, {"direct_message": messages})


async def direct_messages_inbox(svc: GatewayServices, ctx: RequestContext) -> ApiResponse:
    return await _box(svc, ctx, MailBox.INBOX)


async def direct_messages_sentbox(svc: GatewayServices, ctx: RequestContext) -> ApiResponse:
    return await _box(svc, ctx, MailBox.SENTBOX)


async def direct_messages_all(svc: GatewayServices, ctx: RequestContext) -> ApiResponse:
    return await _box(svc, ctx, MailBox.ALL)


async def direct_messages_conversation(svc: GatewayServices, ctx: RequestContext) -> ApiResponse:
    return await _box(svc, ctx, MailBox.CONVERSATION)

import logging
from typing import Any, List, Sequence

from sqlalchemy import select, func, exists, and_, or_, false, literal
from sqlalchemy.orm import aliased

from core.models import EligibilityCriteria
from database.models import (
    User, City, Country, UserImage, UserProfileSettings, UserContactCountry,
    UserBlock, UserLike, UserMatch, UserMessage, UserSession, CompatibilityCacheEntry
)
from database.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


def _pair(left_col, right_col, a, b):
    """(left=a AND right=b) OR (left=b AND right=a)"""
    return or_(
        and_(left_col == a, right_col == b),
        and_(left_col == b, right_col == a),
    )


def _normalized_gender(column):
    return func.lower(func.trim(column))


class CandidateRepository(BaseRepository):
    """
    Eligible-candidate query for one requester.

    Every eligibility rule is a predicate on ``users`` joined 1:1 to
    ``user_profile_settings``; relationship lookups are EXISTS / scalar
    subqueries so a candidate appears at most once.
    """

    def _eligibility_predicates(self, criteria: EligibilityCriteria) -> List[Any]:
        rid = criteria.requester_id
        settings = UserProfileSettings

        predicates = [
            # Cheap exclusions first
            User.id != rid,
            or_(User.is_banned.is_(None), User.is_banned == false()),
            User.real_name.isnot(None),
            ~exists().where(_pair(UserBlock.blocker_id, UserBlock.blocked_id, rid, User.id)),
        ]

        # Requester -> candidate
        if criteria.preferred_gender:
            predicates.append(_normalized_gender(User.gender) == criteria.preferred_gender)

        if criteria.preferred_country_ids:
            predicates.append(User.country_id.in_(criteria.preferred_country_ids))

        # Candidate -> requester (who may contact them)
        if criteria.requester_age is not None:
            predicates.append(or_(settings.contact_age_min.is_(None), settings.contact_age_min <= criteria.requester_age))
            predicates.append(or_(settings.contact_age_max.is_(None), settings.contact_age_max >= criteria.requester_age))

        contact_country_rules = [
            ~exists().where(UserContactCountry.user_id == User.id),
            exists().where(
                UserContactCountry.user_id == User.id,
                UserContactCountry.is_all_countries == True  # noqa: E712
            ),
        ]
        if criteria.requester_country_id is not None:
            contact_country_rules.append(
                exists().where(
                    UserContactCountry.user_id == User.id,
                    UserContactCountry.country_id == criteria.requester_country_id
                )
            )
        predicates.append(or_(*contact_country_rules))

        if not criteria.requester_has_photo:
            predicates.append(or_(settings.require_photos.is_(None), settings.require_photos == false()))

        if criteria.requester_gender:
            predicates.append(or_(
                settings.no_same_gender_contact.is_(None),
                settings.no_same_gender_contact == false(),
                _normalized_gender(User.gender) != criteria.requester_gender,
            ))

        # Already in contact: any live, non-like message in either direction
        predicates.append(~exists().where(
            _pair(UserMessage.sender_id, UserMessage.receiver_id, rid, User.id),
            func.coalesce(UserMessage.deleted_by_receiver, false()) == false(),
            func.coalesce(UserMessage.deleted_by_sender, false()) == false(),
            func.coalesce(UserMessage.recall_type, 'none') == 'none',
            func.coalesce(UserMessage.message_type, 'text') != 'like',
        ))

        predicates.append(~exists().where(
            _pair(UserMatch.user1_id, UserMatch.user2_id, rid, User.id),
            or_(UserMatch.status.is_(None), UserMatch.status == 'active'),
        ))
        return predicates

    def query_eligible_candidates(
        self,
        requester_id: int,
        criteria: EligibilityCriteria,
        limit: int,
        offset: int
    ) -> Sequence[Any]:
        """
        Ordered page of eligible candidate rows.

        Order: mutual like, liked the requester, liked by the requester,
        online, cached score (nulls last), most recent match/like/join date
        (nulls last), user id.
        """
        rid = requester_id
        like_in = aliased(UserLike)
        like_out = aliased(UserLike)

        liked_requester = exists().where(like_in.liked_by == User.id, like_in.liked_user_id == rid)
        requester_liked = exists().where(like_out.liked_by == rid, like_out.liked_user_id == User.id)

        is_mutual_like = and_(liked_requester, requester_liked).label('is_mutual_like')
        liked_by_candidate = liked_requester.label('liked_by_candidate')
        requester_liked_candidate = requester_liked.label('requester_liked_candidate')

        is_online = exists().where(
            UserSession.user_id == User.id,
            UserSession.is_active == True,  # noqa: E712
            UserSession.last_activity > criteria.online_cutoff
        ).label('is_online')

        cached_score = (
            select(CompatibilityCacheEntry.score)
            .where(CompatibilityCacheEntry.user_id == rid, CompatibilityCacheEntry.target_user_id == User.id)
            .limit(1)
            .scalar_subquery()
            .label('cached_score')
        )

        profile_image = (
            select(UserImage.file_name)
            .where(UserImage.user_id == User.id, UserImage.is_profile == 1)
            .order_by(UserImage.id)
            .limit(1)
            .scalar_subquery()
            .label('profile_image')
        )

        last_match_date = (
            select(func.max(UserMatch.match_date))
            .where(_pair(UserMatch.user1_id, UserMatch.user2_id, rid, User.id))
            .scalar_subquery()
        )
        liked_requester_at = (
            select(like_in.created_at)
            .where(like_in.liked_by == User.id, like_in.liked_user_id == rid)
            .scalar_subquery()
        )
        requester_liked_at = (
            select(like_out.created_at)
            .where(like_out.liked_by == rid, like_out.liked_user_id == User.id)
            .scalar_subquery()
        )
        match_date = func.coalesce(last_match_date, liked_requester_at, requester_liked_at, User.date_joined).label('match_date')

        location = func.coalesce(
            City.name + literal(', ') + Country.name,
            City.name,
            Country.name,
            literal('Unknown')
        ).label('location')

        stmt = (
            select(
                User.id.label('user_id'),
                User.real_name,
                User.birthdate,
                User.gender,
                User.country_id,
                location,
                func.coalesce(City.latitude, Country.latitude).label('latitude'),
                func.coalesce(City.longitude, Country.longitude).label('longitude'),
                profile_image,
                match_date,
                is_online,
                liked_by_candidate,
                requester_liked_candidate,
                is_mutual_like,
                cached_score,
            )
            .outerjoin(City, User.city_id == City.id)
            .outerjoin(Country, User.country_id == Country.id)
            .outerjoin(UserProfileSettings, UserProfileSettings.user_id == User.id)
            .where(*self._eligibility_predicates(criteria))
            .order_by(
                is_mutual_like.desc(),
                liked_by_candidate.desc(),
                requester_liked_candidate.desc(),
                is_online.desc(),
                cached_score.desc().nulls_last(),
                match_date.desc().nulls_last(),
                User.id.asc(),
            )
            .limit(limit)
            .offset(offset)
        )

        rows = self.db.execute(stmt).all()
        logger.debug(f"Eligible candidates for user {rid}: {len(rows)} rows (limit={limit}, offset={offset})")
        return rows

    def count_eligible_candidates(self, criteria: EligibilityCriteria) -> int:
        stmt = (
            select(func.count(User.id))
            .select_from(User)
            .outerjoin(UserProfileSettings, UserProfileSettings.user_id == User.id)
            .where(*self._eligibility_predicates(criteria))
        )
        return self.db.execute(stmt).scalar_one()

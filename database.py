from concurrent.futures import Future, ThreadPoolExecutor, wait
import logging

from flask import current_app

from models.commentary import CommentarySource, EAGER_SOURCES, LAZY_SOURCES, make_commentary_key
from utils.commentary_loader import load_commentary
from utils.corpus_loader import load_corpus
from utils.search import BibleSearchEngine, DEFAULT_SEARCH_LIMIT
from utils.verse_index import EMPTY_INDEX, VerseIndex

logger = logging.getLogger(__name__)

EXTENSION_KEY = 'bible_db'
CORPUS_LOAD_KEY = 'corpus'


class OwnerContext:
    """
    Single-threaded owner of all published corpus state.

    Parsing runs on a worker pool; results come back to the owner thread,
    which is the only thread that commits them. Loads are keyed: the first
    trigger for a key dispatches the parse, later triggers attach to the same
    future, so each key is parsed at most once.
    """

    def __init__(self, workers=2):
        self._owner = ThreadPoolExecutor(max_workers=1, thread_name_prefix='corpus-owner')
        self._workers = ThreadPoolExecutor(max_workers=workers, thread_name_prefix='corpus-loader')
        # Owner-confined: key -> future resolved once the result is committed
        self._loads = {}

    def load_once(self, key, parse, commit):
        """
        Ensure `parse` runs once for `key` and its result is passed to `commit`
        on the owner thread. Returns a future that resolves after the commit.
        Never blocks the caller.
        """
        caller_future = Future()
        self._owner.submit(self._dispatch, key, parse, commit, caller_future)
        return caller_future

    def _dispatch(self, key, parse, commit, caller_future):
        committed = self._loads.get(key)
        if committed is None:
            committed = self._loads[key] = Future()
            logger.debug(f"Dispatching load for {key!r}")
            parsed = self._workers.submit(parse)
            parsed.add_done_callback(
                lambda f: self._owner.submit(self._commit, key, f, commit, committed)
            )
        committed.add_done_callback(lambda f: caller_future.set_result(f.result()))

    def _commit(self, key, parsed, commit, committed):
        try:
            commit(parsed.result())
        except Exception:
            logger.exception(f"Load for {key!r} failed; nothing committed")
            committed.set_result(False)
            return
        committed.set_result(True)

    def shutdown(self, wait=True):
        if wait:
            # Queued dispatches may still hand parses to the workers
            self._owner.submit(lambda: None).result()
        # Workers before owner: their completion callbacks submit commits
        self._workers.shutdown(wait=wait)
        self._owner.shutdown(wait=wait)


CORPUS_LOADING = 'loading'
CORPUS_READY = 'ready'
CORPUS_UNAVAILABLE = 'unavailable'


class CorpusSnapshot:
    """One published corpus state. Replaced as a whole, never modified."""

    def __init__(self, index=EMPTY_INDEX, state=CORPUS_LOADING):
        self.index = index
        self.search_engine = BibleSearchEngine(index.verses)
        self.state = state


class BibleDataManager:
    """Published verse index and the queries that read it"""

    def __init__(self, corpus_path, owner, loader=load_corpus):
        self.corpus_path = corpus_path
        self._owner = owner
        self._loader = loader
        self._snapshot = CorpusSnapshot()

    def load(self):
        """Start the background corpus load. Returns a future resolved on commit."""
        return self._owner.load_once(CORPUS_LOAD_KEY, self._parse, self._commit)

    def _parse(self):
        result = self._loader(self.corpus_path)
        state = CORPUS_READY if result.readable else CORPUS_UNAVAILABLE
        return CorpusSnapshot(VerseIndex.build(result), state)

    def _commit(self, snapshot):
        self._snapshot = snapshot
        logger.info(f"Published verse index ({snapshot.state}): {len(snapshot.index)} verses, "
                    f"{len(snapshot.index.books)} books")

    def snapshot(self):
        return self._snapshot

    def state(self):
        """'loading' before the first publish, then 'ready' or 'unavailable'"""
        return self._snapshot.state

    def is_loaded(self):
        return self._snapshot.state == CORPUS_READY

    def verse_count(self):
        return len(self._snapshot.index)

    def books_ordered_by_canon(self):
        return self._snapshot.index.books

    def book(self, name):
        return self._snapshot.index.book(name)

    def verses_in_chapter(self, book_name, chapter):
        return self._snapshot.index.verses_in_chapter(book_name, chapter)

    def verse_by_id(self, verse_id):
        return self._snapshot.index.verse_by_id(verse_id)

    def verses_by_ids(self, verse_ids):
        index = self._snapshot.index
        found = (index.verse_by_id(verse_id) for verse_id in verse_ids)
        return [verse for verse in found if verse is not None]

    def search(self, query, limit=DEFAULT_SEARCH_LIMIT):
        return self._snapshot.search_engine.search(query, limit)


class CommentaryManager:
    """
    Commentary entries from every committed source, keyed by
    "abbrev:chapter:verse". Small sources load at startup, Haydock loads on
    the first commentary query.
    """

    def __init__(self, commentary_dir, owner, loader=load_commentary):
        self.commentary_dir = commentary_dir
        self._owner = owner
        self._loader = loader
        self._entries = {}
        self._loaded_sources = frozenset()

    def load_eager_sources(self):
        """Start loading the small sources. Returns their futures."""
        return [self.ensure_loaded(source) for source in EAGER_SOURCES]

    def ensure_loaded(self, source):
        """Trigger a load of `source` unless loaded or in flight"""
        if source in self._loaded_sources:
            done = Future()
            done.set_result(True)
            return done
        return self._owner.load_once(
            source,
            lambda: self._loader(source, self.commentary_dir),
            lambda parsed: self._commit(source, parsed),
        )

    def _commit(self, source, parsed):
        # Copy-on-write, then swap: readers keep whichever table they grabbed
        entries = dict(self._entries)
        for key, new_entries in parsed.items():
            entries[key] = entries.get(key, ()) + tuple(new_entries)
        self._entries = entries
        self._loaded_sources = self._loaded_sources | {source}
        logger.info(f"Committed {source.display_name} commentary for {len(parsed)} verses")

    def _trigger_lazy_loads(self):
        for source in LAZY_SOURCES:
            self.ensure_loaded(source)

    def is_loaded(self):
        """True once the startup sources are committed"""
        return all(source in self._loaded_sources for source in EAGER_SOURCES)

    def loaded_sources(self):
        return [source for source in CommentarySource if source in self._loaded_sources]

    def commentaries(self, abbreviation, chapter, verse):
        self._trigger_lazy_loads()
        return list(self._entries.get(make_commentary_key(abbreviation, chapter, verse), ()))

    def commentaries_by_source(self, abbreviation, chapter, verse):
        """[(source, entries), ...] in CommentarySource order, empty sources omitted"""
        all_entries = self.commentaries(abbreviation, chapter, verse)
        result = []
        for source in CommentarySource:
            source_entries = [e for e in all_entries if e.source is source]
            if source_entries:
                result.append((source, source_entries))
        return result

    def has_commentary(self, abbreviation, chapter, verse):
        self._trigger_lazy_loads()
        return bool(self._entries.get(make_commentary_key(abbreviation, chapter, verse)))

    def available_sources(self, abbreviation, chapter, verse):
        return [source for source, _ in self.commentaries_by_source(abbreviation, chapter, verse)]


class BibleDatabase:
    """The corpus and commentary managers sharing one owner context"""

    def __init__(self, corpus_path, commentary_dir, workers=2,
                 corpus_loader=load_corpus, commentary_loader=load_commentary):
        self.owner = OwnerContext(workers=workers)
        self.bible = BibleDataManager(corpus_path, self.owner, loader=corpus_loader)
        self.commentary = CommentaryManager(commentary_dir, self.owner, loader=commentary_loader)
        self._startup = []

    @classmethod
    def from_config(cls, config):
        return cls(
            corpus_path=config['CORPUS_FILE'],
            commentary_dir=config['COMMENTARY_DIR'],
            workers=config['LOADER_WORKERS'],
        )

    def start(self):
        """Kick off the startup loads without waiting for them"""
        logger.info("Starting corpus and commentary loads...")
        self._startup = [self.bible.load()] + self.commentary.load_eager_sources()
        return list(self._startup)

    def wait_until_ready(self, timeout=None):
        """Block until the startup loads have committed. Returns False on timeout."""
        _, not_done = wait(self._startup, timeout=timeout)
        return not not_done

    def status(self):
        return {
            'corpus_state': self.bible.state(),
            'corpus_loaded': self.bible.is_loaded(),
            'verse_count': self.bible.verse_count(),
            'book_count': len(self.bible.books_ordered_by_canon()),
            'commentary_loaded': self.commentary.is_loaded(),
            'commentary_sources': [source.value for source in self.commentary.loaded_sources()],
        }

    def shutdown(self, wait=True):
        self.owner.shutdown(wait=wait)


def get_db():
    """The BibleDatabase owned by the current Flask app"""
    return current_app.extensions[EXTENSION_KEY]

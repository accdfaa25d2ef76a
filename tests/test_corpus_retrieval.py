import pytest

from rag.common import CorpusIndexer, MemoryVectorStore, Processor, Retriever

from conftest import KeywordEmbedder

ALPHABET_TEXT = "".join(chr(ord("a") + i % 26) for i in range(450))


def test_split_text_uses_fixed_overlapping_windows():
    processor = Processor(chunk_size=200, chunk_overlap=100)

    chunks = processor.split_text(ALPHABET_TEXT)

    assert [len(chunk) for chunk in chunks] == [200, 200, 200, 150]
    assert chunks[0] == ALPHABET_TEXT[0:200]
    assert chunks[1] == ALPHABET_TEXT[100:300]
    assert chunks[-1] == ALPHABET_TEXT[300:450]
    assert chunks[1][:100] == chunks[0][100:]


def test_short_text_is_a_single_chunk():
    processor = Processor()

    assert processor.split_text("short text") == ["short text"]
    assert processor.split_text("") == []


def test_invalid_overlap_is_rejected():
    with pytest.raises(ValueError):
        Processor(chunk_size=100, chunk_overlap=100)
    with pytest.raises(ValueError):
        Processor(chunk_size=0, chunk_overlap=0)


def test_create_chunks_normalizes_and_tags_metadata():
    processor = Processor(chunk_size=200, chunk_overlap=100)

    chunks = processor.create_chunks("Hello\t\t world\n\n\n\nBye", metadata={"source": "corpus.txt"})

    assert len(chunks) == 1
    assert chunks[0].content == "Hello world\n\nBye"
    assert chunks[0].metadata["source"] == "corpus.txt"
    assert chunks[0].metadata["chunk_index"] == 0


def test_memory_vector_store_ranks_by_cosine_similarity():
    store = MemoryVectorStore(dimension=2)
    store.add_vectors(
        [[1.0, 0.0], [0.0, 1.0], [0.7, 0.7]],
        metadata=[{"k": "x"}, {"k": "y"}, {"k": "xy"}],
        ids=["x", "y", "xy"]
    )

    results = store.search([1.0, 0.0], top_k=2)

    assert [doc_id for doc_id, _, _ in results] == ["x", "xy"]
    assert results[0][1] == pytest.approx(1.0)


def test_memory_vector_store_filter_and_delete():
    store = MemoryVectorStore(dimension=2)
    store.add_vectors([[1.0, 0.0], [0.9, 0.1]], metadata=[{"k": "a"}, {"k": "b"}], ids=["a", "b"])

    assert [doc_id for doc_id, _, _ in store.search([1.0, 0.0], filter_dict={"k": "b"})] == ["b"]
    assert store.delete(["a"])
    assert store.vector_count == 1
    assert not store.delete(["missing"])


def test_memory_vector_store_rejects_wrong_dimension():
    store = MemoryVectorStore(dimension=3)

    with pytest.raises(ValueError):
        store.add_vectors([[1.0, 0.0]])


def test_empty_store_returns_nothing():
    assert MemoryVectorStore(dimension=2).search([1.0, 0.0]) == []


@pytest.mark.asyncio
async def test_indexer_and_retriever_end_to_end(tmp_path):
    corpus = tmp_path / "corpus.txt"
    corpus.write_text("The cat sat on the mat.\n\nThe dog chased the ball.", encoding="utf-8")
    retriever = Retriever(KeywordEmbedder(), MemoryVectorStore(dimension=2), top_k=1)
    indexer = CorpusIndexer(retriever, Processor(chunk_size=30, chunk_overlap=5))

    summary = await indexer.index_file(str(corpus))

    assert summary["source"] == "corpus.txt"
    assert summary["chunks_count"] == retriever.document_count == 2

    results = await retriever.retrieve("Where is the dog?")
    assert len(results) == 1
    assert "dog" in results[0].content
    assert results[0].metadata["source"] == "corpus.txt"


@pytest.mark.asyncio
async def test_indexer_missing_file(tmp_path):
    retriever = Retriever(KeywordEmbedder(), MemoryVectorStore(dimension=2))
    indexer = CorpusIndexer(retriever, Processor())

    with pytest.raises(FileNotFoundError):
        await indexer.index_file(str(tmp_path / "missing.txt"))


@pytest.mark.asyncio
async def test_blank_query_returns_nothing():
    retriever = Retriever(KeywordEmbedder(), MemoryVectorStore(dimension=2))
    await retriever.add_documents(["cat"])

    assert await retriever.retrieve("   ") == []

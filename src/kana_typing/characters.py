"""文字種判定と仮名の段階変換テーブル。

濁点・半濁点の付与はUnicode正規化（NFD/NFC）で扱い、
小書き仮名は明示的な対応表で扱う。
"""

import unicodedata

import jaconv

# 結合文字（濁点・半濁点）
DAKUTEN = "゙"
HANDAKUTEN = "゚"

# 小書き仮名 -> 元の仮名
SMALL_KANA: dict[str, str] = {
    small: large
    for small, large in zip(
        "ぁぃぅぇぉっゃゅょゎゕゖァィゥェォッャュョヮヵヶ",
        "あいうえおつやゆよわかけアイウエオツヤユヨワカケ",
    )
}


def is_kanji(char: str) -> bool:
    """1文字が漢字（踊り字「々」を含む）かどうかを返す。"""
    if len(char) != 1:
        return False
    cp = ord(char)
    return (
        0x4E00 <= cp <= 0x9FFF
        or 0x3400 <= cp <= 0x4DBF
        or 0xF900 <= cp <= 0xFAFF
        or cp == 0x3005
    )


def normalize_reading(text: str | None) -> str:
    """読みを比較用に正規化する。

    半角を全角に変換し（NFKC）、空白を除去し、片仮名を平仮名に揃える。
    """
    if not text:
        return ""
    out = unicodedata.normalize("NFKC", text)
    out = out.replace(" ", "").replace("　", "")
    return jaconv.kata2hira(out)


def reading_matches(text: str, reading: str) -> bool:
    """textとreadingが平仮名・片仮名の違いを除いて一致するかを返す。

    全角の片仮名と平仮名は1対1で対応するため、長さは変わらない。
    """
    return jaconv.kata2hira(text) == jaconv.kata2hira(reading)


def to_script_of(reading: str, sample: str) -> str:
    """sampleが片仮名を含めばreadingを片仮名に、そうでなければそのまま返す。"""
    if jaconv.kata2hira(sample) != sample:
        return jaconv.hira2kata(reading)
    return reading


def _compose(base: str, mark: str) -> str | None:
    """base + 結合文字が1文字に合成できればその文字を返す。"""
    composed = unicodedata.normalize("NFC", base + mark)
    return composed if len(composed) == 1 else None


def transformation_chain(target: str) -> list[str]:
    """targetに到達するまでの段階入力の列を返す。

    例:
        "ぱ" -> ["は", "ば", "ぱ"]
        "が" -> ["か", "が"]
        "っ" -> ["つ", "っ"]
        "あ" -> ["あ"]

    Args:
        target: 目標の仮名1文字

    Returns:
        清音（または大書き）から始まりtargetで終わるリスト
    """
    if len(target) != 1:
        return [target]

    decomposed = unicodedata.normalize("NFD", target)
    if len(decomposed) == 2 and decomposed[1] in (DAKUTEN, HANDAKUTEN):
        base = decomposed[0]
        if decomposed[1] == DAKUTEN:
            return [base, target]
        # 半濁音は濁音を経由する（は→ば→ぱ）
        voiced = _compose(base, DAKUTEN)
        if voiced:
            return [base, voiced, target]
        return [base, target]

    if target in SMALL_KANA:
        return [SMALL_KANA[target], target]

    return [target]

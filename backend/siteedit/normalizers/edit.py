def normalize_edit(record, include_content=True):
    data = record.to_dict()

    if not include_content:
        data.pop("original_content", None)
        data.pop("proposed_content", None)

    return data
